"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Catálogo de mensagens localizadas
- Interfaces (Ports)
- Base classes para Domain Events
"""

from .exceptions import (
    DomainException,
    ValidationError,
    CamposInvalidosError,
    EntityNotFoundError,
    EntityAlreadyExistsError,
    BusinessRuleViolationError,
    PessoaPossuiEnderecoError,
    ServicoExternoError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher
from .messages import MessageKey, message_for

__all__ = [
    "DomainException",
    "ValidationError",
    "CamposInvalidosError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "BusinessRuleViolationError",
    "PessoaPossuiEnderecoError",
    "ServicoExternoError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "MessageKey",
    "message_for",
]
