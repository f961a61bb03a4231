"""
Domain Events do Domínio de Pessoas.

Eventos:
- PessoaCriadaEvent: Nova pessoa cadastrada
- PessoaAtualizadaEvent: Dados da pessoa alterados
- PessoaExcluidaEvent: Pessoa removida do cadastro

Uso:
    with uow:
        repo.save(pessoa)
        uow.publish_event(PessoaCriadaEvent(aggregate_id=pessoa.cpf, ...))
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.shared.events import DomainEvent


@dataclass
class PessoaCriadaEvent(DomainEvent):
    """
    Evento: Pessoa foi cadastrada.

    Attributes:
        idade: Idade informada
        total_enderecos: Quantidade de endereços cadastrados
    """

    idade: Optional[int] = None
    total_enderecos: int = 0

    @property
    def aggregate_type(self) -> str:
        return "Pessoa"


@dataclass
class PessoaAtualizadaEvent(DomainEvent):
    """
    Evento: Dados da pessoa foram alterados.

    Attributes:
        campos: Nomes dos campos alterados
    """

    campos: tuple = ()

    @property
    def aggregate_type(self) -> str:
        return "Pessoa"

    def _get_event_data(self) -> Dict[str, Any]:
        return {"campos": list(self.campos)}


@dataclass
class PessoaExcluidaEvent(DomainEvent):
    """
    Evento: Pessoa foi excluída.

    Publicado após o commit da exclusão. No modo celery o log de
    auditoria é gravado pelo handler deste evento; no modo logging,
    pelo hook pós-exclusão do ExcluirPessoaService.
    """

    @property
    def aggregate_type(self) -> str:
        return "Pessoa"
