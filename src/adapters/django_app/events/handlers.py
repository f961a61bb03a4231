"""
Event Handlers - Processadores de Eventos de Domínio.

Com EVENT_PUBLISHER_MODE=celery o log de auditoria de exclusões é
gravado aqui, por um worker, a partir do PessoaExcluidaEvent. A task
repete em caso de falha (banco indisponível, deadlock), o que o hook
síncrono do modo logging não faz.

Eventos sem handler (PessoaCriada, PessoaAtualizada) ficam só no log
do publisher.

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        # Processar evento
"""

from datetime import datetime
import logging
from typing import Dict, Any
from celery import shared_task

from src.config.container import get_container

logger = logging.getLogger(__name__)


# =============================================================================
# Event Handlers - Pessoas
# =============================================================================

@shared_task(
    bind=True,
    max_retries=5,
    default_retry_delay=30,
    autoretry_for=(Exception,),
    acks_late=True,
)
def handle_pessoa_excluida(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento PessoaExcluidaEvent: grava o log de exclusão.

    O momento registrado é o da exclusão (occurred_at do evento),
    não o da execução da task.

    Args:
        event_data: Dados do evento serializado
    """
    cpf = event_data.get('aggregate_id')
    occurred_at = event_data.get('occurred_at')
    excluido_em = datetime.fromisoformat(occurred_at) if occurred_at else None

    get_container().registrar_exclusao_service().execute(cpf, excluido_em=excluido_em)

    logger.info(f"[HANDLER] PessoaExcluida: log de exclusão gravado para {cpf}")


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

EVENT_HANDLERS = {
    'PessoaExcluidaEvent': handle_pessoa_excluida,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Roteia eventos para os handlers apropriados.

    Args:
        event_type: Tipo do evento (ex: 'PessoaExcluidaEvent')
        event_data: Dados do evento serializado
    """
    handler = EVENT_HANDLERS.get(event_type)

    if handler:
        logger.info(f"[DISPATCHER] Roteando {event_type} para handler")
        handler.delay(event_data)
    else:
        logger.debug(f"[DISPATCHER] Sem handler para {event_type}")
