"""
Ports (Interfaces) do Domínio de Pessoas.

Define os contratos que os Adapters de infraestrutura devem implementar:
- PessoaRepository: persistência e consultas de pessoas
- LogExclusaoRepository: trilha de auditoria de exclusões
- CepGateway: consulta de CEP em serviço externo

Implementações em memória (para testes) ficam neste módulo.

Example:
    # No Adapter (Django)
    class DjangoPessoaRepository(PessoaRepository):
        def save(self, pessoa: PessoaEntity) -> None:
            ...
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.exceptions import EntityAlreadyExistsError

from .entities import LogExclusaoEntity, PessoaEntity


@runtime_checkable
class PessoaRepository(Protocol):
    """
    Interface para persistência de Pessoas.

    Implementações:
    - DjangoPessoaRepository (ORM)
    - InMemoryPessoaRepository (para testes)
    """

    def add(self, pessoa: PessoaEntity) -> None:
        """
        Insere pessoa nova e seus endereços.

        Raises:
            EntityAlreadyExistsError: CPF já cadastrado
        """
        ...

    def save(self, pessoa: PessoaEntity) -> None:
        """Persiste pessoa e seus endereços (create ou update)."""
        ...

    def get_by_cpf(self, cpf: str) -> Optional[PessoaEntity]:
        """Busca pessoa pelo CPF; None se não existir."""
        ...

    def delete(self, cpf: str) -> bool:
        """
        Remove pessoa (e, por composição, seus endereços).

        Returns:
            True se removeu, False se não existia
        """
        ...

    def exists(self, cpf: str) -> bool:
        ...

    def list_all(self) -> List[PessoaEntity]:
        ...

    def list_by_idade_minima(self, idade_minima: int) -> List[PessoaEntity]:
        """Pessoas com idade >= idade_minima, em ordem crescente de idade."""
        ...

    def possui_endereco_com_cep(self, cpf: str) -> bool:
        """True se a pessoa tem algum endereço com CEP preenchido."""
        ...


@runtime_checkable
class LogExclusaoRepository(Protocol):
    """Interface para a trilha de auditoria de exclusões (append-only)."""

    def add(self, log: LogExclusaoEntity) -> None:
        ...

    def list_all(self) -> List[LogExclusaoEntity]:
        """Registros do mais recente para o mais antigo."""
        ...

    def list_by_cpf(self, cpf: str) -> List[LogExclusaoEntity]:
        ...


@dataclass(frozen=True)
class CepInfo:
    """Dados retornados pela consulta de CEP."""

    cep: str
    state: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None


class CepLookupError(Exception):
    """
    Falha na consulta de CEP.

    Attributes:
        status_code: Status HTTP retornado pelo serviço (None se não houve resposta)
        message: Mensagem retornada pelo serviço
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or "Erro na consulta de CEP")


@runtime_checkable
class CepGateway(Protocol):
    """
    Interface para o serviço externo de CEP.

    Implementações:
    - BrasilApiCepClient (GET /cep/v1/{cep})
    - InMemoryCepGateway (para testes)
    """

    def consultar(self, cep: str) -> CepInfo:
        """
        Consulta um CEP.

        Raises:
            CepLookupError: Se o serviço responder erro ou estiver indisponível
        """
        ...


# =============================================================================
# Implementações em memória
# =============================================================================

class InMemoryPessoaRepository:
    """
    Implementação em memória do PessoaRepository.

    Útil para testes unitários e prototipagem. Não usar em produção!
    """

    def __init__(self):
        self._pessoas: Dict[str, PessoaEntity] = {}

    def add(self, pessoa: PessoaEntity) -> None:
        if pessoa.cpf in self._pessoas:
            raise EntityAlreadyExistsError(
                f"Pessoa {pessoa.cpf} já cadastrada",
                entity_type="Pessoa",
                entity_id=pessoa.cpf,
            )
        self._pessoas[pessoa.cpf] = pessoa

    def save(self, pessoa: PessoaEntity) -> None:
        self._pessoas[pessoa.cpf] = pessoa

    def get_by_cpf(self, cpf: str) -> Optional[PessoaEntity]:
        return self._pessoas.get(cpf)

    def delete(self, cpf: str) -> bool:
        return self._pessoas.pop(cpf, None) is not None

    def exists(self, cpf: str) -> bool:
        return cpf in self._pessoas

    def list_all(self) -> List[PessoaEntity]:
        return sorted(self._pessoas.values(), key=lambda p: p.cpf)

    def list_by_idade_minima(self, idade_minima: int) -> List[PessoaEntity]:
        # sorted é estável: empates de idade mantêm a ordem por CPF
        return sorted(
            (
                p for p in self.list_all()
                if p.idade is not None and p.idade >= idade_minima
            ),
            key=lambda p: p.idade,
        )

    def possui_endereco_com_cep(self, cpf: str) -> bool:
        pessoa = self._pessoas.get(cpf)
        return bool(pessoa and pessoa.possui_endereco)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._pessoas.clear()


class InMemoryLogExclusaoRepository:
    """Trilha de auditoria em memória (para testes)."""

    def __init__(self):
        self._logs: List[LogExclusaoEntity] = []

    def add(self, log: LogExclusaoEntity) -> None:
        log.id = len(self._logs) + 1
        self._logs.append(log)

    def list_all(self) -> List[LogExclusaoEntity]:
        return list(reversed(self._logs))

    def list_by_cpf(self, cpf: str) -> List[LogExclusaoEntity]:
        return [log for log in self.list_all() if log.cpf == cpf]


class InMemoryCepGateway:
    """
    CepGateway em memória.

    CEPs desconhecidos respondem 404, como a BrasilAPI.
    Registra as consultas feitas em `consultas`.

    Example:
        gateway = InMemoryCepGateway({
            "01001000": CepInfo("01001000", "SP", "São Paulo", "Praça da Sé"),
        })
    """

    def __init__(
        self,
        ceps: Optional[Dict[str, CepInfo]] = None,
        erros: Optional[Dict[str, CepLookupError]] = None,
    ):
        self._ceps = dict(ceps or {})
        self._erros = dict(erros or {})
        self.consultas: List[str] = []

    def consultar(self, cep: str) -> CepInfo:
        self.consultas.append(cep)

        if cep in self._erros:
            raise self._erros[cep]

        if cep not in self._ceps:
            raise CepLookupError(f"CEP {cep} não encontrado", status_code=404)

        return self._ceps[cep]


RegistroExclusaoHook = Callable[[str], None]
