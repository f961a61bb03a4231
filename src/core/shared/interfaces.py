"""
Interfaces (Ports) - Contratos entre Core e Adapters.

São os "Ports" da Arquitetura Hexagonal compartilhados entre domínios:
- UnitOfWork: transação atômica + eventos pós-commit
- EventPublisher: publicação de eventos de domínio

Princípio: Core define interfaces; Adapters implementam.
"""

from abc import ABC, abstractmethod
from typing import List

from .events import DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Pattern: Context Manager
        with uow:
            repo.save(pessoa)
            uow.publish_event(PessoaCriadaEvent(aggregate_id=pessoa.cpf))
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Uma mesma instância pode ser usada em vários blocos `with`
    consecutivos; cada bloco é uma transação independente.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        """Inicia uma nova transação."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste as mudanças e publica eventos.

        Note:
            Eventos só são publicados após commit bem-sucedido.
            Se commit falhar, eventos são descartados.
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz as mudanças e descarta eventos."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após commit.

        Args:
            event: Evento de domínio a ser publicado
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna eventos enfileirados (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        """Limpa fila de eventos."""
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Implementações em src/adapters/django_app/events/publishers.py
    (Logging, Celery, InMemory).
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Publica evento para consumidores."""
        raise NotImplementedError
