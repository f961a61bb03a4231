"""
Use Cases (Application Services) do Domínio de Pessoas.

Use Cases implementados:
- EnriquecerEnderecosService: Preenche uf/cidade/rua a partir do CEP
- CriarPessoaService: Cadastra pessoa (validação → CEP → persistência)
- AtualizarPessoaService: Atualiza idade/endereços
- ObterPessoaService / ListarPessoasService: Leitura
- ListarPessoasPorIdadeService: Pessoas com idade >= mínima
- VerificarEnderecoService: A pessoa possui endereço com CEP?
- VerificarCpfExisteService: O CPF está cadastrado?
- ExcluirPessoaService: Exclusão protegida + log de auditoria
- RegistrarExclusaoService: Grava o log de auditoria
- ExcluirPessoasEmLoteService: Exclusão de uma lista de CPFs
- ListarLogExclusoesService: Consulta a trilha de auditoria

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Sem lógica de infraestrutura
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    CamposInvalidosError,
    DomainException,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    PessoaPossuiEnderecoError,
    ServicoExternoError,
    ValidationError,
)
from src.core.shared.messages import MessageKey

from .ports import (
    CepGateway,
    CepLookupError,
    LogExclusaoRepository,
    PessoaRepository,
    RegistroExclusaoHook,
)
from .entities import EnderecoEntity, LogExclusaoEntity, PessoaEntity
from .dtos import (
    AtualizarPessoaInputDTO,
    CriarPessoaInputDTO,
    LogExclusaoOutputDTO,
    PessoaOutputDTO,
    ResultadoExclusaoDTO,
)
from .events import PessoaAtualizadaEvent, PessoaCriadaEvent, PessoaExcluidaEvent
from .validators import IDADE_MINIMA, validar_campos

logger = logging.getLogger(__name__)


class EnriquecerEnderecosService:
    """
    Use Case: Enriquecer endereços com os dados do CEP.

    Consulta os CEPs em sequência, na ordem da lista. A primeira
    falha interrompe o processo: os endereços seguintes não são
    consultados e não há nova tentativa.

    Example:
        service = EnriquecerEnderecosService(BrasilApiCepClient())
        service.execute(pessoa.enderecos)
    """

    def __init__(self, cep_gateway: CepGateway):
        self.cep_gateway = cep_gateway

    def execute(self, enderecos: Optional[List[EnderecoEntity]]) -> None:
        """
        Aplica uf/cidade/rua em cada endereço (altera as entidades).

        Raises:
            ServicoExternoError: Na primeira consulta que falhar
        """
        if enderecos is None:
            logger.info("Nenhum endereço fornecido na requisição")
            return

        for endereco in enderecos:
            if not endereco.tem_cep:
                logger.info(f"Endereço {endereco.id} sem CEP, consulta ignorada")
                continue

            cep = endereco.cep
            logger.info(f"Consultando CEP: {cep}")

            try:
                info = self.cep_gateway.consultar(cep)
            except CepLookupError as e:
                logger.error(f"Erro ao consultar CEP {cep}: {e.message}", exc_info=True)
                raise ServicoExternoError(
                    status_code=e.status_code,
                    upstream_message=e.message,
                ) from e

            endereco.aplicar_dados_cep(uf=info.state, cidade=info.city, rua=info.street)

            logger.info(
                f"Dados do CEP {cep} obtidos com sucesso: "
                f"Estado: {info.state}, Cidade: {info.city}, Rua: {info.street}"
            )


def _garantir_campos_validos(
    cpf: Optional[str],
    idade: Optional[int],
    idade_minima: int,
) -> None:
    erros = validar_campos(cpf=cpf, idade=idade, idade_minima=idade_minima)
    if erros:
        logger.warning(
            "Dados rejeitados: " + ", ".join(erro.code for erro in erros)
        )
        raise CamposInvalidosError(erros)


class CriarPessoaService:
    """
    Use Case: Cadastrar pessoa.

    Fluxo:
    1. Validar campos (idade mínima, CPF)
    2. Enriquecer endereços pelo CEP
    3. Rejeitar CPF duplicado
    4. Persistir e disparar PessoaCriadaEvent

    Example:
        service = CriarPessoaService(pessoa_repo, uow, enriquecer)
        output = service.execute(CriarPessoaInputDTO(cpf="11144477735", idade=30))
    """

    def __init__(
        self,
        pessoa_repo: PessoaRepository,
        uow: UnitOfWork,
        enriquecer_enderecos: EnriquecerEnderecosService,
        idade_minima: int = IDADE_MINIMA,
    ):
        self.pessoa_repo = pessoa_repo
        self.uow = uow
        self.enriquecer_enderecos = enriquecer_enderecos
        self.idade_minima = idade_minima

    def execute(self, input_dto: CriarPessoaInputDTO) -> PessoaOutputDTO:
        """
        Raises:
            CamposInvalidosError: Idade abaixo da mínima ou CPF inválido/ausente
            ServicoExternoError: Falha na consulta de CEP
            EntityAlreadyExistsError: CPF já cadastrado
        """
        # CPF é a chave: ausente conta como inválido
        cpf = input_dto.cpf if input_dto.cpf is not None else ""
        _garantir_campos_validos(cpf, input_dto.idade, self.idade_minima)

        enderecos = (
            [e.to_entity() for e in input_dto.enderecos]
            if input_dto.enderecos is not None else None
        )
        self.enriquecer_enderecos.execute(enderecos)

        with self.uow:
            if self.pessoa_repo.exists(cpf):
                raise EntityAlreadyExistsError(
                    f"Pessoa {cpf} já cadastrada",
                    entity_type="Pessoa",
                    entity_id=cpf,
                )

            pessoa = PessoaEntity.criar(
                cpf=cpf,
                idade=input_dto.idade,
                enderecos=enderecos,
            )
            # add() também recusa CPF duplicado: cobre cadastros concorrentes
            self.pessoa_repo.add(pessoa)

            self.uow.publish_event(
                PessoaCriadaEvent(
                    aggregate_id=pessoa.cpf,
                    idade=pessoa.idade,
                    total_enderecos=len(pessoa.enderecos),
                )
            )

        logger.info(f"Pessoa cadastrada: {pessoa.cpf}")
        return PessoaOutputDTO.from_entity(pessoa)


class AtualizarPessoaService:
    """
    Use Case: Atualizar pessoa.

    O CPF não pode ser alterado. Endereços informados substituem
    os existentes e passam pelo enriquecimento de CEP.
    """

    def __init__(
        self,
        pessoa_repo: PessoaRepository,
        uow: UnitOfWork,
        enriquecer_enderecos: EnriquecerEnderecosService,
        idade_minima: int = IDADE_MINIMA,
    ):
        self.pessoa_repo = pessoa_repo
        self.uow = uow
        self.enriquecer_enderecos = enriquecer_enderecos
        self.idade_minima = idade_minima

    def execute(self, input_dto: AtualizarPessoaInputDTO) -> PessoaOutputDTO:
        """
        Raises:
            CamposInvalidosError: Idade abaixo da mínima ou CPF inválido
            ValidationError: Tentativa de alterar o CPF
            ServicoExternoError: Falha na consulta de CEP
            EntityNotFoundError: CPF não cadastrado
        """
        _garantir_campos_validos(
            input_dto.cpf_informado, input_dto.idade, self.idade_minima
        )

        if input_dto.cpf_informado is not None and input_dto.cpf_informado != input_dto.cpf:
            raise ValidationError(field="cpf", kind=MessageKey.IMMUTABLE_CPF)

        enderecos = (
            [e.to_entity() for e in input_dto.enderecos]
            if input_dto.enderecos is not None else None
        )
        self.enriquecer_enderecos.execute(enderecos)

        with self.uow:
            pessoa = self.pessoa_repo.get_by_cpf(input_dto.cpf)

            if not pessoa:
                raise EntityNotFoundError(
                    f"Pessoa {input_dto.cpf} não encontrada",
                    entity_type="Pessoa",
                    entity_id=input_dto.cpf,
                    kind=MessageKey.CPF_NOT_FOUND,
                )

            campos = []
            if input_dto.idade is not None:
                pessoa.alterar_idade(input_dto.idade)
                campos.append("idade")
            if enderecos is not None:
                pessoa.substituir_enderecos(enderecos)
                campos.append("enderecos")

            self.pessoa_repo.save(pessoa)

            self.uow.publish_event(
                PessoaAtualizadaEvent(aggregate_id=pessoa.cpf, campos=tuple(campos))
            )

        return PessoaOutputDTO.from_entity(pessoa)


class ObterPessoaService:
    """Use Case: Obter pessoa pelo CPF."""

    def __init__(self, pessoa_repo: PessoaRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, cpf: str) -> PessoaOutputDTO:
        pessoa = self.pessoa_repo.get_by_cpf(cpf)

        if not pessoa:
            raise EntityNotFoundError(
                f"Pessoa {cpf} não encontrada",
                entity_type="Pessoa",
                entity_id=cpf,
                kind=MessageKey.CPF_NOT_FOUND,
            )

        return PessoaOutputDTO.from_entity(pessoa)


class ListarPessoasService:
    """
    Use Case: Listar pessoas.

    Não usa UoW pois é operação de leitura.
    """

    def __init__(self, pessoa_repo: PessoaRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self) -> List[PessoaOutputDTO]:
        return [PessoaOutputDTO.from_entity(p) for p in self.pessoa_repo.list_all()]


class ListarPessoasPorIdadeService:
    """Use Case: Pessoas com idade maior ou igual à informada, da mais nova à mais velha."""

    def __init__(self, pessoa_repo: PessoaRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, idade_minima: int) -> List[PessoaOutputDTO]:
        if isinstance(idade_minima, bool) or not isinstance(idade_minima, int):
            raise ValidationError(field="idade", kind=MessageKey.INVALID_AGE_TYPE)

        logger.info(f"Buscando pessoas maiores ou igual a {idade_minima}")

        pessoas = self.pessoa_repo.list_by_idade_minima(idade_minima)
        return [PessoaOutputDTO.from_entity(p) for p in pessoas]


class VerificarEnderecoService:
    """
    Use Case: Verificar se a pessoa possui endereço com CEP.

    Erros de consulta não são propagados: são logados e a
    resposta é False (assume que não há endereço).
    """

    def __init__(self, pessoa_repo: PessoaRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, cpf: str) -> bool:
        try:
            return bool(self.pessoa_repo.possui_endereco_com_cep(cpf))
        except Exception as e:
            logger.error(f"Erro ao consultar endereço: {e}", exc_info=True)
            return False


class VerificarCpfExisteService:
    """
    Use Case: Verificar se o CPF está cadastrado.

    Erros de consulta são logados e a resposta é False
    (assume que o CPF não existe).
    """

    def __init__(self, pessoa_repo: PessoaRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, cpf: str) -> bool:
        try:
            return bool(self.pessoa_repo.exists(cpf))
        except Exception as e:
            logger.error(f"Erro ao verificar CPF {cpf}: {e}", exc_info=True)
            return False


class RegistrarExclusaoService:
    """
    Use Case: Gravar o log de auditoria de uma exclusão.

    Executa em sua própria transação, separada da exclusão.
    """

    def __init__(self, log_repo: LogExclusaoRepository, uow: UnitOfWork):
        self.log_repo = log_repo
        self.uow = uow

    def execute(self, cpf: str, excluido_em: Optional[datetime] = None) -> None:
        """
        Args:
            cpf: CPF excluído
            excluido_em: Momento da exclusão; None usa o horário atual
        """
        with self.uow:
            self.log_repo.add(LogExclusaoEntity.registrar(cpf, excluido_em))

        logger.info(f"Log de exclusão registrado para o CPF {cpf}")


class ExcluirPessoaService:
    """
    Use Case: Excluir pessoa.

    Fluxo:
    1. Rejeitar se a pessoa possui endereço com CEP
    2. Remover em transação e disparar PessoaExcluidaEvent
    3. Após o commit, chamar o hook de auditoria

    Falhas no hook de auditoria são apenas logadas: a exclusão
    já confirmada não é desfeita. Sem hook, o log fica a cargo de
    quem consome o PessoaExcluidaEvent.

    Example:
        service = ExcluirPessoaService(
            pessoa_repo, uow, VerificarEnderecoService(pessoa_repo),
            registrar_exclusao=RegistrarExclusaoService(log_repo, log_uow).execute,
        )
        service.execute("11144477735")
    """

    def __init__(
        self,
        pessoa_repo: PessoaRepository,
        uow: UnitOfWork,
        verificar_endereco: VerificarEnderecoService,
        registrar_exclusao: Optional[RegistroExclusaoHook] = None,
    ):
        self.pessoa_repo = pessoa_repo
        self.uow = uow
        self.verificar_endereco = verificar_endereco
        self.registrar_exclusao = registrar_exclusao

    def execute(self, cpf: str) -> None:
        """
        Raises:
            PessoaPossuiEnderecoError: Pessoa com endereço cadastrado
            EntityNotFoundError: CPF não cadastrado
        """
        if self.verificar_endereco.execute(cpf):
            logger.warning(f"Exclusão rejeitada: CPF {cpf} possui endereço cadastrado")
            raise PessoaPossuiEnderecoError(cpf)

        with self.uow:
            if not self.pessoa_repo.delete(cpf):
                raise EntityNotFoundError(
                    f"Pessoa {cpf} não encontrada",
                    entity_type="Pessoa",
                    entity_id=cpf,
                    kind=MessageKey.CPF_NOT_FOUND,
                )

            self.uow.publish_event(PessoaExcluidaEvent(aggregate_id=cpf))

        logger.info(f"CPF {cpf} excluído com sucesso.")
        self._registrar(cpf)

    def _registrar(self, cpf: str) -> None:
        if self.registrar_exclusao is None:
            return

        try:
            self.registrar_exclusao(cpf)
        except Exception as e:
            logger.error(
                f"Falha ao registrar log de exclusão do CPF {cpf}: {e}",
                exc_info=True,
            )


class ExcluirPessoasEmLoteService:
    """
    Use Case: Excluir uma lista de CPFs.

    Cada CPF é processado de forma independente e gera exatamente
    um resultado, na mesma ordem da entrada:
    - CPF_NOT_FOUND: CPF não cadastrado
    - HAS_ADDRESS: pessoa possui endereço com CEP
    - SUCCESS_DELETE: excluído (e auditado)
    - DELETE_FAILED: erro na exclusão (com a mensagem original, se houver)
    """

    def __init__(
        self,
        verificar_cpf: VerificarCpfExisteService,
        verificar_endereco: VerificarEnderecoService,
        excluir_pessoa: ExcluirPessoaService,
    ):
        self.verificar_cpf = verificar_cpf
        self.verificar_endereco = verificar_endereco
        self.excluir_pessoa = excluir_pessoa

    def execute(self, cpfs: Sequence[str]) -> List[ResultadoExclusaoDTO]:
        return [self._excluir(cpf) for cpf in cpfs]

    def _excluir(self, cpf: str) -> ResultadoExclusaoDTO:
        logger.info(f"Iniciando exclusão do CPF: {cpf}")

        if not self.verificar_cpf.execute(cpf):
            logger.error(f"CPF {cpf} não encontrado.")
            return ResultadoExclusaoDTO(cpf, MessageKey.CPF_NOT_FOUND)

        if self.verificar_endereco.execute(cpf):
            logger.error(f"CPF {cpf} possui endereço cadastrado.")
            return ResultadoExclusaoDTO(cpf, MessageKey.HAS_ADDRESS)

        try:
            self.excluir_pessoa.execute(cpf)
        except DomainException as e:
            logger.error(f"Erro ao excluir CPF {cpf}: {e.message}")
            if e.kind is not None:
                return ResultadoExclusaoDTO(cpf, e.kind)
            return ResultadoExclusaoDTO(cpf, MessageKey.DELETE_FAILED, e.message or None)
        except Exception as e:
            logger.error(f"Erro ao excluir CPF {cpf}: {e}", exc_info=True)
            return ResultadoExclusaoDTO(cpf, MessageKey.DELETE_FAILED, str(e) or None)

        return ResultadoExclusaoDTO(cpf, MessageKey.SUCCESS_DELETE)


class ListarLogExclusoesService:
    """Use Case: Consultar a trilha de auditoria de exclusões."""

    def __init__(self, log_repo: LogExclusaoRepository):
        self.log_repo = log_repo

    def execute(self, cpf: Optional[str] = None) -> List[LogExclusaoOutputDTO]:
        logs = self.log_repo.list_by_cpf(cpf) if cpf else self.log_repo.list_all()
        return [LogExclusaoOutputDTO.from_entity(log) for log in logs]
