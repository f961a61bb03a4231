"""
Entidades do Domínio de Pessoas.

Entidades:
- PessoaEntity: Agregado principal (chave: CPF)
- EnderecoEntity: Endereço pertencente a uma pessoa (composição)
- LogExclusaoEntity: Registro de auditoria de exclusão (append-only)

Regras de Negócio Encapsuladas:
- CPF é a identidade da pessoa e não muda após o cadastro
- uf/cidade/rua só existem depois do enriquecimento pelo CEP
- "Possui endereço" = algum endereço com CEP preenchido
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import uuid

from src.core.shared.exceptions import ValidationError
from src.core.shared.messages import MessageKey


@dataclass
class EnderecoEntity:
    """
    Endereço de uma pessoa.

    Attributes:
        id: Identificador único (UUID)
        cep: CEP informado pelo cliente
        uf: Estado (derivado do CEP)
        cidade: Cidade (derivada do CEP)
        rua: Logradouro (derivado do CEP)
    """

    cep: Optional[str] = None
    uf: Optional[str] = None
    cidade: Optional[str] = None
    rua: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def tem_cep(self) -> bool:
        """Verifica se o CEP está preenchido."""
        return bool(self.cep and self.cep.strip())

    @property
    def esta_enriquecido(self) -> bool:
        """Verifica se os dados do CEP já foram aplicados."""
        return self.uf is not None or self.cidade is not None or self.rua is not None

    def aplicar_dados_cep(
        self,
        uf: Optional[str],
        cidade: Optional[str],
        rua: Optional[str],
    ) -> None:
        """Aplica estado, cidade e rua obtidos na consulta do CEP."""
        self.uf = uf
        self.cidade = cidade
        self.rua = rua


@dataclass
class PessoaEntity:
    """
    Entidade de Domínio: Pessoa.

    Invariantes:
    - cpf é obrigatório e imutável
    - enderecos mantém a ordem informada pelo cliente

    A validação de formato (CPF, idade mínima) é feita pelo
    validador de campos antes de a entidade ser construída.

    Example:
        pessoa = PessoaEntity.criar(
            cpf="11144477735",
            idade=30,
            enderecos=[EnderecoEntity(cep="01001000")],
        )
    """

    cpf: str = ""
    idade: Optional[int] = None
    enderecos: List[EnderecoEntity] = field(default_factory=list)
    criado_em: datetime = field(default_factory=datetime.now)
    atualizado_em: datetime = field(default_factory=datetime.now)

    @classmethod
    def criar(
        cls,
        cpf: str,
        idade: Optional[int] = None,
        enderecos: Optional[List[EnderecoEntity]] = None,
    ) -> "PessoaEntity":
        """
        Factory method para criar pessoa.

        Raises:
            ValidationError: Se CPF não informado
        """
        if not cpf:
            raise ValidationError(field="cpf", kind=MessageKey.WRONG_CPF)

        return cls(
            cpf=cpf,
            idade=idade,
            enderecos=list(enderecos or []),
        )

    def alterar_idade(self, idade: Optional[int]) -> None:
        self.idade = idade
        self._atualizar_timestamp()

    def substituir_enderecos(self, enderecos: List[EnderecoEntity]) -> None:
        """Substitui a lista de endereços (composição: os antigos deixam de existir)."""
        self.enderecos = list(enderecos)
        self._atualizar_timestamp()

    def _atualizar_timestamp(self) -> None:
        self.atualizado_em = datetime.now()

    @property
    def possui_endereco(self) -> bool:
        """Verifica se há algum endereço com CEP preenchido."""
        return any(endereco.tem_cep for endereco in self.enderecos)

    def __repr__(self) -> str:
        return (
            f"PessoaEntity("
            f"cpf={self.cpf}, "
            f"idade={self.idade}, "
            f"enderecos={len(self.enderecos)}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por CPF (identidade de entidade)."""
        if not isinstance(other, PessoaEntity):
            return False
        return self.cpf == other.cpf

    def __hash__(self) -> int:
        return hash(self.cpf)


@dataclass
class LogExclusaoEntity:
    """
    Registro de auditoria de uma exclusão de pessoa.

    Sobrevive à pessoa excluída; nunca é alterado nem removido.
    """

    cpf: str = ""
    excluido_em: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None

    @classmethod
    def registrar(cls, cpf: str, excluido_em: Optional[datetime] = None) -> "LogExclusaoEntity":
        if not cpf:
            raise ValidationError(
                "CPF é obrigatório no log de exclusão", field="cpf", kind=MessageKey.WRONG_CPF
            )
        if excluido_em is None:
            return cls(cpf=cpf)
        return cls(cpf=cpf, excluido_em=excluido_em)
