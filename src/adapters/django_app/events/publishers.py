"""
Publicação dos eventos do cadastro (PessoaCriada, PessoaAtualizada,
PessoaExcluida) após o commit da Unit of Work.

- LoggingEventPublisher: grava o evento no log
- CeleryEventPublisher: grava no log e envia para o dispatcher na fila `events`
- InMemoryEventPublisher: guarda os eventos (TestingContainer)

O modo é escolhido por EVENT_PUBLISHER_MODE (logging | celery).
"""

from typing import List
import logging
import json

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)


class LoggingEventPublisher(EventPublisher):
    """
    Modo padrão (EVENT_PUBLISHER_MODE=logging).

    Cada evento vira uma linha de log com o payload serializado.
    """

    def __init__(self, log_level: int = logging.INFO):
        self._log_level = log_level

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.to_dict(), default=str)}"
        )


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para a fila `events` do Celery.

    Falha no broker é logada e não interrompe a requisição.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        try:
            from src.adapters.django_app.events.handlers import dispatch_domain_event
            dispatch_domain_event.delay(event.event_type, event.to_dict())
        except Exception as e:
            logger.error(f"Falha ao publicar evento no Celery: {e}", exc_info=True)


class InMemoryEventPublisher(EventPublisher):
    """
    Guarda os eventos publicados, na ordem, para asserções em testes.
    """

    def __init__(self):
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def clear(self) -> None:
        self._published_events.clear()


def get_event_publisher(mode: str = "logging") -> EventPublisher:
    """
    Factory para obter publisher apropriado.

    Args:
        mode: "celery" para processamento assíncrono; qualquer
            outro valor usa o publisher de log

    Returns:
        Publisher configurado
    """
    if (mode or "").lower() == "celery":
        return CeleryEventPublisher()
    return LoggingEventPublisher()
