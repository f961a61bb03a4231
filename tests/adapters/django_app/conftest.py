"""
Fixtures compartilhadas pelos testes dos adapters Django.

O Django é configurado em tests/conftest.py; o banco de testes
(SQLite em memória) é criado pelo pytest-django a partir das migrations.
"""

import uuid

import pytest


@pytest.fixture
def pessoa_model_factory():
    """Factory para criar PessoaModel (e endereços) para testes."""
    from src.adapters.django_app.pessoas.models import EnderecoModel, PessoaModel

    def create_pessoa(cpf="11144477735", idade=30, ceps=(), **kwargs):
        pessoa = PessoaModel.objects.create(cpf=cpf, idade=idade, **kwargs)
        for ordem, cep in enumerate(ceps):
            EnderecoModel.objects.create(
                id=str(uuid.uuid4()),
                pessoa=pessoa,
                cep=cep,
                ordem=ordem,
            )
        return pessoa

    return create_pessoa


@pytest.fixture
def sample_pessoa_entity():
    """Cria entidade de pessoa com dois endereços enriquecidos."""
    from src.core.pessoas.entities import EnderecoEntity, PessoaEntity

    return PessoaEntity.criar(
        cpf="52998224725",
        idade=42,
        enderecos=[
            EnderecoEntity(cep="01001000", uf="SP", cidade="São Paulo", rua="Praça da Sé"),
            EnderecoEntity(cep="20040020", uf="RJ", cidade="Rio de Janeiro", rua="Avenida Rio Branco"),
        ],
    )


@pytest.fixture
def inmemory_uow():
    """Unit of Work em memória para testes unitários."""
    from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
    return InMemoryUnitOfWork()
