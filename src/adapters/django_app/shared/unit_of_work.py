"""
Unit of Work - Implementação Django.

Cada bloco `with uow:` corresponde a um `transaction.atomic()`:
dentro de outra transação (ex: testes com pytest-django) vira
um savepoint.

Responsabilidades:
- Iniciar/finalizar transações
- Commit/Rollback coordenado
- Publicar eventos após commit bem-sucedido
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Eventos são publicados apenas após commit bem-sucedido.
    A mesma instância pode ser reutilizada em blocos consecutivos
    (ex: exclusão em lote).

    Example:
        with DjangoUnitOfWork(event_publisher=publisher) as uow:
            repo.save(pessoa)
            uow.publish_event(PessoaCriadaEvent(aggregate_id=pessoa.cpf))
        # Commit automático + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            repo.delete(cpf)
            raise Exception("Erro!")
        # Rollback automático, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        """
        Args:
            event_publisher: Publicador de eventos (Logging, Celery, ...)
        """
        super().__init__()
        self._event_publisher = event_publisher
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        if self._atomic is not None:
            raise RuntimeError("Transação já iniciada nesta Unit of Work")

        self._committed = False
        self._rolled_back = False
        self.clear_events()

        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Ordem de execução:
        1. Commit da transação (ou liberação do savepoint)
        2. Publicar eventos para handlers

        Raises:
            Exception: Se commit falhar, re-lança exceção
        """
        if self._atomic is None:
            logger.warning("Transaction already finalized")
            return

        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(None, None, None)
        except Exception as e:
            logger.error(f"Commit failed: {e}")
            self._rolled_back = True
            self.clear_events()
            raise

        self._committed = True
        logger.debug("Transaction committed")
        self._publish_events()

    def rollback(self) -> None:
        """Desfaz as mudanças e descarta eventos."""
        if self._atomic is None:
            return

        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(RuntimeError, RuntimeError("rollback"), None)
            logger.debug("Transaction rolled back")
        finally:
            self._rolled_back = True
            self.clear_events()

    def _publish_events(self) -> None:
        """
        Publica eventos para handlers.

        Falha na publicação é logada: o commit já aconteceu.
        """
        for event in self.collect_events():
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )

            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Failed to publish event: {e}", exc_info=True)

        self.clear_events()

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não persiste nada: apenas simula commit/rollback e
    encaminha os eventos ao publisher após o commit.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        self.clear_events()

    def commit(self) -> None:
        self._committed = True
        for event in self.collect_events():
            self._published_events.append(event)
            if self._event_publisher:
                self._event_publisher.publish(event)
        self.clear_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        """Eventos entregues após commit."""
        return list(self._published_events)
