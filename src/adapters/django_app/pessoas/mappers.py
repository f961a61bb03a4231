"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- PessoaEntity ↔ PessoaModel (+ EnderecoModel)
- LogExclusaoEntity ↔ LogExclusaoModel

Mappers são stateless e não contêm lógica de negócio.
"""

from datetime import datetime
from typing import Iterable, List

from django.utils import timezone

from src.core.pessoas.entities import EnderecoEntity, LogExclusaoEntity, PessoaEntity

from .models import EnderecoModel, LogExclusaoModel, PessoaModel


def _aware(value: datetime) -> datetime:
    """Entities usam datetime local sem timezone; o ORM (USE_TZ) exige aware."""
    if value is not None and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


class PessoaMapper:
    """
    Mapper para conversão entre PessoaEntity e PessoaModel.

    - to_model(): Entity → Model (sem endereços)
    - to_endereco_models(): endereços da Entity → EnderecoModel
    - to_entity(): Model (+ endereços) → Entity
    """

    @staticmethod
    def to_model(entity: PessoaEntity) -> PessoaModel:
        """
        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return PessoaModel(
            cpf=entity.cpf,
            idade=entity.idade,
            criado_em=_aware(entity.criado_em),
            atualizado_em=_aware(entity.atualizado_em),
        )

    @staticmethod
    def to_endereco_models(entity: PessoaEntity) -> List[EnderecoModel]:
        return [
            EnderecoModel(
                id=endereco.id,
                pessoa_id=entity.cpf,
                cep=endereco.cep,
                uf=endereco.uf,
                cidade=endereco.cidade,
                rua=endereco.rua,
                ordem=ordem,
            )
            for ordem, endereco in enumerate(entity.enderecos)
        ]

    @staticmethod
    def to_entity(model: PessoaModel) -> PessoaEntity:
        """
        Converte PessoaModel para PessoaEntity.

        Bypassa o factory method .criar(): dados já validados no cadastro.
        Use prefetch_related('enderecos') para evitar N+1.
        """
        return PessoaEntity(
            cpf=model.cpf,
            idade=model.idade,
            enderecos=[
                EnderecoEntity(
                    id=endereco.id,
                    cep=endereco.cep,
                    uf=endereco.uf,
                    cidade=endereco.cidade,
                    rua=endereco.rua,
                )
                for endereco in model.enderecos.all()
            ],
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )

    @staticmethod
    def to_entity_list(models: Iterable[PessoaModel]) -> List[PessoaEntity]:
        return [PessoaMapper.to_entity(model) for model in models]


class LogExclusaoMapper:

    @staticmethod
    def to_model(entity: LogExclusaoEntity) -> LogExclusaoModel:
        return LogExclusaoModel(
            id=entity.id,
            cpf=entity.cpf,
            excluido_em=_aware(entity.excluido_em),
        )

    @staticmethod
    def to_entity(model: LogExclusaoModel) -> LogExclusaoEntity:
        return LogExclusaoEntity(
            id=model.id,
            cpf=model.cpf,
            excluido_em=model.excluido_em,
        )
