"""
Data Transfer Objects (DTOs) do Domínio de Pessoas.

Tipos de DTOs:
- Input DTOs: Dados de entrada já convertidos pela API
- Output DTOs: Dados formatados para resposta
- Resultado de exclusão em lote (chave de mensagem + detalhe)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from src.core.shared.messages import MessageKey, message_for

from .entities import EnderecoEntity, LogExclusaoEntity, PessoaEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class EnderecoInputDTO:
    """Endereço enviado pelo cliente (apenas o CEP é de entrada)."""

    cep: Optional[str] = None

    def to_entity(self) -> EnderecoEntity:
        return EnderecoEntity(cep=self.cep)


@dataclass(frozen=True)
class CriarPessoaInputDTO:
    """
    DTO de entrada para criar pessoa.

    Attributes:
        cpf: CPF (11 dígitos)
        idade: Idade (opcional)
        enderecos: Endereços a enriquecer pelo CEP (None = não informado)
    """

    cpf: Optional[str]
    idade: Optional[int] = None
    enderecos: Optional[Tuple[EnderecoInputDTO, ...]] = None


@dataclass(frozen=True)
class AtualizarPessoaInputDTO:
    """
    DTO de entrada para atualizar pessoa.

    Campos None não são alterados. `enderecos`, quando informado,
    substitui a lista inteira.
    """

    cpf: str
    idade: Optional[int] = None
    enderecos: Optional[Tuple[EnderecoInputDTO, ...]] = None
    cpf_informado: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class EnderecoOutputDTO:
    id: str
    cep: Optional[str]
    uf: Optional[str]
    cidade: Optional[str]
    rua: Optional[str]

    @classmethod
    def from_entity(cls, entity: EnderecoEntity) -> "EnderecoOutputDTO":
        return cls(
            id=entity.id,
            cep=entity.cep,
            uf=entity.uf,
            cidade=entity.cidade,
            rua=entity.rua,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "CEP": self.cep,
            "uf": self.uf,
            "cidade": self.cidade,
            "rua": self.rua,
        }


@dataclass
class PessoaOutputDTO:
    """
    DTO de saída com os dados da pessoa.

    Attributes:
        cpf: CPF
        idade: Idade
        enderecos: Endereços (com dados do CEP quando enriquecidos)
        criado_em: Data/hora de criação
        atualizado_em: Data/hora da última atualização
    """

    cpf: str
    idade: Optional[int]
    criado_em: datetime
    atualizado_em: datetime
    enderecos: List[EnderecoOutputDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: PessoaEntity) -> "PessoaOutputDTO":
        return cls(
            cpf=entity.cpf,
            idade=entity.idade,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
            enderecos=[EnderecoOutputDTO.from_entity(e) for e in entity.enderecos],
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "cpf": self.cpf,
            "idade": self.idade,
            "enderecos": [e.to_dict() for e in self.enderecos],
            "criado_em": self.criado_em.isoformat(),
            "atualizado_em": self.atualizado_em.isoformat(),
        }


@dataclass
class LogExclusaoOutputDTO:
    id: Optional[int]
    cpf: str
    excluido_em: datetime

    @classmethod
    def from_entity(cls, entity: LogExclusaoEntity) -> "LogExclusaoOutputDTO":
        return cls(id=entity.id, cpf=entity.cpf, excluido_em=entity.excluido_em)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "cpf": self.cpf,
            "excluido_em": self.excluido_em.isoformat(),
        }


@dataclass(frozen=True)
class ResultadoExclusaoDTO:
    """
    Resultado da exclusão de um CPF dentro de um lote.

    Attributes:
        cpf: CPF processado
        resultado: Chave da mensagem (SUCCESS_DELETE, CPF_NOT_FOUND, ...)
        detalhe: Mensagem original do erro de persistência, se houver
    """

    cpf: str
    resultado: MessageKey
    detalhe: Optional[str] = None

    @property
    def sucesso(self) -> bool:
        return self.resultado == MessageKey.SUCCESS_DELETE

    def message(self, locale: Optional[str] = None) -> str:
        """Mensagem para o cliente: o detalhe do erro ou o texto localizado."""
        return self.detalhe or message_for(self.resultado, locale)

    def to_dict(self, locale: Optional[str] = None) -> dict:
        return {"cpf": self.cpf, "message": self.message(locale)}
