"""
Repositórios Django para persistência de Pessoas.

Implementam os Ports definidos em src/core/pessoas/ports.py.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Princípios:
- Repository não contém lógica de negócio
- Usa Mapper para conversões
- Trata apenas persistência
"""

from typing import List, Optional
import logging

from django.db import IntegrityError, transaction

from src.core.pessoas.entities import LogExclusaoEntity, PessoaEntity
from src.core.shared.exceptions import EntityAlreadyExistsError

from .models import EnderecoModel, LogExclusaoModel, PessoaModel
from .mappers import LogExclusaoMapper, PessoaMapper

logger = logging.getLogger(__name__)


class DjangoPessoaRepository:
    """
    Implementação Django do PessoaRepository.

    Example:
        repo = DjangoPessoaRepository()
        repo.save(pessoa)
        pessoa = repo.get_by_cpf("11144477735")
        pessoas = repo.list_by_idade_minima(18)
    """

    def __init__(self):
        self._mapper = PessoaMapper()

    def _queryset(self):
        return PessoaModel.objects.prefetch_related('enderecos')

    def add(self, pessoa: PessoaEntity) -> None:
        """
        Insere pessoa nova.

        A chave primária é o CPF: a constraint do banco decide entre
        dois cadastros simultâneos do mesmo CPF, e o perdedor recebe
        EntityAlreadyExistsError em vez de sobrescrever o vencedor.
        """
        logger.debug(f"Adding pessoa: {pessoa.cpf}")

        model = self._mapper.to_model(pessoa)

        try:
            with transaction.atomic():
                model.save(force_insert=True)
                EnderecoModel.objects.bulk_create(self._mapper.to_endereco_models(pessoa))
        except IntegrityError as e:
            logger.warning(f"Pessoa already exists: {pessoa.cpf}")
            raise EntityAlreadyExistsError(
                f"Pessoa {pessoa.cpf} já cadastrada",
                entity_type="Pessoa",
                entity_id=pessoa.cpf,
            ) from e

        logger.info(f"Pessoa added: {pessoa.cpf}")

    def save(self, pessoa: PessoaEntity) -> None:
        """
        Persiste pessoa (create ou update).

        A lista de endereços gravada substitui a anterior.
        """
        logger.debug(f"Saving pessoa: {pessoa.cpf}")

        model = self._mapper.to_model(pessoa)

        with transaction.atomic():
            PessoaModel.objects.update_or_create(
                cpf=pessoa.cpf,
                defaults={
                    'idade': model.idade,
                    'criado_em': model.criado_em,
                    'atualizado_em': model.atualizado_em,
                },
            )
            EnderecoModel.objects.filter(pessoa_id=pessoa.cpf).delete()
            EnderecoModel.objects.bulk_create(self._mapper.to_endereco_models(pessoa))

        logger.info(f"Pessoa saved: {pessoa.cpf}")

    def get_by_cpf(self, cpf: str) -> Optional[PessoaEntity]:
        try:
            return self._mapper.to_entity(self._queryset().get(cpf=cpf))
        except PessoaModel.DoesNotExist:
            logger.debug(f"Pessoa not found: {cpf}")
            return None

    def delete(self, cpf: str) -> bool:
        """
        Remove pessoa (endereços removidos em cascata).

        Returns:
            True se alguma linha foi removida
        """
        deleted_count, _ = PessoaModel.objects.filter(cpf=cpf).delete()

        if deleted_count > 0:
            logger.info(f"Pessoa deleted: {cpf}")
        else:
            logger.debug(f"Pessoa not found for deletion: {cpf}")

        return deleted_count > 0

    def exists(self, cpf: str) -> bool:
        return PessoaModel.objects.filter(cpf=cpf).exists()

    def list_all(self) -> List[PessoaEntity]:
        """
        Warning:
            Sem paginação
        """
        return self._mapper.to_entity_list(self._queryset().order_by('cpf'))

    def list_by_idade_minima(self, idade_minima: int) -> List[PessoaEntity]:
        models = (
            self._queryset()
            .filter(idade__gte=idade_minima)
            .order_by('idade', 'cpf')
        )
        return self._mapper.to_entity_list(models)

    def possui_endereco_com_cep(self, cpf: str) -> bool:
        ceps = EnderecoModel.objects.filter(
            pessoa_id=cpf,
            cep__isnull=False,
        ).values_list('cep', flat=True)

        return any(cep.strip() for cep in ceps)


class DjangoLogExclusaoRepository:
    """
    Trilha de auditoria de exclusões (append-only).

    Não há update nem delete: registros nunca são alterados.
    """

    def __init__(self):
        self._mapper = LogExclusaoMapper()

    def add(self, log: LogExclusaoEntity) -> None:
        model = self._mapper.to_model(log)
        model.save(force_insert=True)
        log.id = model.id

        logger.info(f"Log de exclusão gravado: {log.cpf} (id={log.id})")

    def list_all(self) -> List[LogExclusaoEntity]:
        return [self._mapper.to_entity(m) for m in LogExclusaoModel.objects.all()]

    def list_by_cpf(self, cpf: str) -> List[LogExclusaoEntity]:
        return [
            self._mapper.to_entity(m)
            for m in LogExclusaoModel.objects.filter(cpf=cpf)
        ]
