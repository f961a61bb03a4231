"""
Testes Unitários para Use Cases do Domínio de Pessoas.

Estratégia de Teste:
- Usa InMemoryPessoaRepository / InMemoryLogExclusaoRepository (fakes)
- Usa InMemoryCepGateway no lugar da BrasilAPI
- Usa FakeUnitOfWork para testar transações e eventos
- Testa cenários de sucesso e erro

Coverage:
- EnriquecerEnderecosService
- CriarPessoaService / AtualizarPessoaService
- ObterPessoaService / ListarPessoasService
- ListarPessoasPorIdadeService
- VerificarEnderecoService / VerificarCpfExisteService
- ExcluirPessoaService / RegistrarExclusaoService
- ExcluirPessoasEmLoteService
- ListarLogExclusoesService
"""

from datetime import datetime

import pytest
from typing import List

from src.core.pessoas.use_cases import (
    AtualizarPessoaService,
    CriarPessoaService,
    EnriquecerEnderecosService,
    ExcluirPessoaService,
    ExcluirPessoasEmLoteService,
    ListarLogExclusoesService,
    ListarPessoasPorIdadeService,
    ListarPessoasService,
    ObterPessoaService,
    RegistrarExclusaoService,
    VerificarCpfExisteService,
    VerificarEnderecoService,
)
from src.core.pessoas.dtos import (
    AtualizarPessoaInputDTO,
    CriarPessoaInputDTO,
    EnderecoInputDTO,
)
from src.core.pessoas.entities import EnderecoEntity, LogExclusaoEntity, PessoaEntity
from src.core.pessoas.events import (
    PessoaAtualizadaEvent,
    PessoaCriadaEvent,
    PessoaExcluidaEvent,
)
from src.core.pessoas.ports import (
    CepInfo,
    CepLookupError,
    InMemoryCepGateway,
    InMemoryLogExclusaoRepository,
    InMemoryPessoaRepository,
)
from src.core.shared.exceptions import (
    CamposInvalidosError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    PessoaPossuiEnderecoError,
    ServicoExternoError,
    ValidationError,
)
from src.core.shared.events import DomainEvent
from src.core.shared.messages import MessageKey


CPF_A = "11144477735"
CPF_B = "52998224725"
CPF_C = "12345678909"
CPF_D = "98765432100"


class FakeUnitOfWork:
    """
    Fake Unit of Work para testes.

    Eventos de blocos com rollback são descartados; os de
    blocos confirmados ficam disponíveis em collect_events().
    """

    def __init__(self):
        self._pending: List[DomainEvent] = []
        self._events: List[DomainEvent] = []
        self.commits = 0
        self.rollbacks = 0

    def __enter__(self):
        self._pending = []
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    def commit(self):
        self.commits += 1
        self._events.extend(self._pending)
        self._pending = []

    def rollback(self):
        self.rollbacks += 1
        self._pending = []

    def publish_event(self, event: DomainEvent):
        self._pending.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return list(self._events)

    @property
    def committed(self) -> bool:
        return self.commits > 0

    @property
    def rolled_back(self) -> bool:
        return self.rollbacks > 0


class FailingPessoaRepository(InMemoryPessoaRepository):
    """Repositório cuja exclusão falha."""

    def __init__(self, erro: Exception):
        super().__init__()
        self.erro = erro

    def delete(self, cpf: str) -> bool:
        raise self.erro


class BrokenQueriesRepository(InMemoryPessoaRepository):
    """Consultas de existência/endereço falham."""

    def exists(self, cpf: str) -> bool:
        raise RuntimeError("conexão perdida")

    def possui_endereco_com_cep(self, cpf: str) -> bool:
        raise RuntimeError("conexão perdida")


class StaleExistsRepository(InMemoryPessoaRepository):
    """exists() desatualizado: outro cadastro do mesmo CPF já foi gravado."""

    def exists(self, cpf: str) -> bool:
        return False


@pytest.fixture
def pessoa_repo():
    return InMemoryPessoaRepository()


@pytest.fixture
def log_repo():
    return InMemoryLogExclusaoRepository()


@pytest.fixture
def uow():
    return FakeUnitOfWork()


@pytest.fixture
def log_uow():
    return FakeUnitOfWork()


@pytest.fixture
def cep_gateway():
    return InMemoryCepGateway({
        "01001000": CepInfo("01001000", "SP", "São Paulo", "Praça da Sé"),
        "20040020": CepInfo("20040020", "RJ", "Rio de Janeiro", "Avenida Rio Branco"),
        "30130010": CepInfo("30130010", "MG", "Belo Horizonte", "Praça Sete de Setembro"),
    })


@pytest.fixture
def enriquecer(cep_gateway):
    return EnriquecerEnderecosService(cep_gateway)


@pytest.fixture
def criar_service(pessoa_repo, uow, enriquecer):
    return CriarPessoaService(pessoa_repo, uow, enriquecer)


@pytest.fixture
def registrar_exclusao(log_repo, log_uow):
    return RegistrarExclusaoService(log_repo, log_uow)


@pytest.fixture
def excluir_service(pessoa_repo, uow, registrar_exclusao):
    return ExcluirPessoaService(
        pessoa_repo,
        uow,
        VerificarEnderecoService(pessoa_repo),
        registrar_exclusao=registrar_exclusao.execute,
    )


def _pessoa(cpf, idade=30, ceps=()):
    return PessoaEntity.criar(
        cpf=cpf,
        idade=idade,
        enderecos=[EnderecoEntity(cep=cep) for cep in ceps],
    )


class TestEnriquecerEnderecosService:
    """Testes para EnriquecerEnderecosService."""

    def test_enriquece_todos_os_enderecos(self, enriquecer, cep_gateway):
        enderecos = [EnderecoEntity(cep="01001000"), EnderecoEntity(cep="20040020")]

        enriquecer.execute(enderecos)

        assert [(e.uf, e.cidade, e.rua) for e in enderecos] == [
            ("SP", "São Paulo", "Praça da Sé"),
            ("RJ", "Rio de Janeiro", "Avenida Rio Branco"),
        ]
        assert cep_gateway.consultas == ["01001000", "20040020"]

    def test_preserva_cep_e_id(self, enriquecer):
        endereco = EnderecoEntity(cep="01001000")
        id_original = endereco.id

        enriquecer.execute([endereco])

        assert endereco.cep == "01001000"
        assert endereco.id == id_original

    def test_sem_enderecos_nao_consulta(self, enriquecer, cep_gateway):
        enriquecer.execute(None)
        enriquecer.execute([])

        assert cep_gateway.consultas == []

    def test_endereco_sem_cep_nao_consulta(self, enriquecer, cep_gateway):
        enderecos = [EnderecoEntity(cep=""), EnderecoEntity(cep="01001000")]

        enriquecer.execute(enderecos)

        assert cep_gateway.consultas == ["01001000"]
        assert enderecos[0].uf is None

    def test_interrompe_na_primeira_falha(self, enriquecer, cep_gateway):
        """Falha no segundo CEP: primeiro enriquecido, terceiro nunca consultado."""
        enderecos = [
            EnderecoEntity(cep="01001000"),
            EnderecoEntity(cep="00000000"),
            EnderecoEntity(cep="20040020"),
        ]

        with pytest.raises(ServicoExternoError) as exc_info:
            enriquecer.execute(enderecos)

        assert exc_info.value.status_code == 404
        assert "00000000" in exc_info.value.upstream_message
        assert exc_info.value.kind == MessageKey.API_CEP_ERROR
        assert enderecos[0].cidade == "São Paulo"
        assert enderecos[2].cidade is None
        assert cep_gateway.consultas == ["01001000", "00000000"]

    def test_falha_sem_status_vira_500(self):
        gateway = InMemoryCepGateway(erros={"01001000": CepLookupError()})
        service = EnriquecerEnderecosService(gateway)

        with pytest.raises(ServicoExternoError) as exc_info:
            service.execute([EnderecoEntity(cep="01001000")])

        assert exc_info.value.status_code == 500
        assert exc_info.value.localized_message("pt") == "Erro ao consultar o CEP na BrasilAPI"

    def test_preserva_status_e_mensagem_do_upstream(self):
        gateway = InMemoryCepGateway(erros={
            "99999999": CepLookupError("Todos os serviços de CEP retornaram erro.", status_code=404),
        })
        service = EnriquecerEnderecosService(gateway)

        with pytest.raises(ServicoExternoError) as exc_info:
            service.execute([EnderecoEntity(cep="99999999")])

        assert exc_info.value.status_code == 404
        assert exc_info.value.localized_message("en") == "Todos os serviços de CEP retornaram erro."


class TestCriarPessoaService:
    """Testes para CriarPessoaService."""

    def test_criar_pessoa_sucesso(self, criar_service):
        output = criar_service.execute(
            CriarPessoaInputDTO(
                cpf=CPF_A,
                idade=30,
                enderecos=(EnderecoInputDTO(cep="01001000"),),
            )
        )

        assert output.cpf == CPF_A
        assert output.idade == 30
        assert len(output.enderecos) == 1
        assert output.enderecos[0].cidade == "São Paulo"
        assert output.enderecos[0].cep == "01001000"

    def test_persiste_no_repositorio(self, criar_service, pessoa_repo):
        criar_service.execute(CriarPessoaInputDTO(cpf=CPF_A, idade=16))

        pessoa = pessoa_repo.get_by_cpf(CPF_A)
        assert pessoa is not None
        assert pessoa.idade == 16
        assert pessoa.enderecos == []

    def test_publica_evento_e_commita(self, criar_service, uow):
        criar_service.execute(
            CriarPessoaInputDTO(cpf=CPF_A, idade=20, enderecos=(EnderecoInputDTO("01001000"),))
        )

        events = uow.collect_events()
        assert uow.committed is True
        assert len(events) == 1
        assert isinstance(events[0], PessoaCriadaEvent)
        assert events[0].aggregate_id == CPF_A
        assert events[0].total_enderecos == 1

    def test_idade_abaixo_da_minima(self, criar_service, pessoa_repo, cep_gateway):
        with pytest.raises(CamposInvalidosError) as exc_info:
            criar_service.execute(
                CriarPessoaInputDTO(cpf=CPF_A, idade=15, enderecos=(EnderecoInputDTO("01001000"),))
            )

        assert exc_info.value.kind == MessageKey.WRONG_AGE
        assert pessoa_repo.exists(CPF_A) is False
        assert cep_gateway.consultas == []

    def test_cpf_invalido(self, criar_service, pessoa_repo):
        with pytest.raises(CamposInvalidosError) as exc_info:
            criar_service.execute(CriarPessoaInputDTO(cpf="12345678900", idade=30))

        assert exc_info.value.kind == MessageKey.WRONG_CPF
        assert pessoa_repo.list_all() == []

    def test_cpf_ausente(self, criar_service):
        with pytest.raises(CamposInvalidosError) as exc_info:
            criar_service.execute(CriarPessoaInputDTO(cpf=None, idade=30))

        assert exc_info.value.kind == MessageKey.WRONG_CPF

    def test_falha_no_cep_nao_persiste(self, criar_service, pessoa_repo, uow):
        with pytest.raises(ServicoExternoError):
            criar_service.execute(
                CriarPessoaInputDTO(cpf=CPF_A, idade=30, enderecos=(EnderecoInputDTO("00000000"),))
            )

        assert pessoa_repo.exists(CPF_A) is False
        assert uow.collect_events() == []

    def test_cpf_duplicado(self, criar_service, pessoa_repo, uow):
        pessoa_repo.save(_pessoa(CPF_A, idade=50))

        with pytest.raises(EntityAlreadyExistsError) as exc_info:
            criar_service.execute(CriarPessoaInputDTO(cpf=CPF_A, idade=20))

        assert exc_info.value.kind == MessageKey.ENTITY_ALREADY_EXISTS
        assert uow.rolled_back is True
        assert pessoa_repo.get_by_cpf(CPF_A).idade == 50

    def test_cpf_gravado_apos_verificacao_nao_sobrescreve(self, uow, enriquecer):
        repo = StaleExistsRepository()
        repo.save(_pessoa(CPF_A, idade=30))
        service = CriarPessoaService(repo, uow, enriquecer)

        with pytest.raises(EntityAlreadyExistsError):
            service.execute(CriarPessoaInputDTO(cpf=CPF_A, idade=99))

        assert uow.rolled_back is True
        assert uow.collect_events() == []
        assert repo.get_by_cpf(CPF_A).idade == 30

    def test_idade_minima_configuravel(self, pessoa_repo, uow, enriquecer):
        service = CriarPessoaService(pessoa_repo, uow, enriquecer, idade_minima=18)

        with pytest.raises(CamposInvalidosError):
            service.execute(CriarPessoaInputDTO(cpf=CPF_A, idade=17))


class TestAtualizarPessoaService:
    """Testes para AtualizarPessoaService."""

    @pytest.fixture
    def service(self, pessoa_repo, uow, enriquecer):
        return AtualizarPessoaService(pessoa_repo, uow, enriquecer)

    def test_atualiza_idade(self, service, pessoa_repo, uow):
        pessoa_repo.save(_pessoa(CPF_A, idade=20, ceps=["01001000"]))

        output = service.execute(AtualizarPessoaInputDTO(cpf=CPF_A, idade=21))

        assert output.idade == 21
        assert len(output.enderecos) == 1
        events = uow.collect_events()
        assert isinstance(events[0], PessoaAtualizadaEvent)
        assert events[0].campos == ("idade",)

    def test_substitui_enderecos_enriquecidos(self, service, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, ceps=["01001000"]))

        output = service.execute(
            AtualizarPessoaInputDTO(
                cpf=CPF_A,
                enderecos=(EnderecoInputDTO("20040020"), EnderecoInputDTO("30130010")),
            )
        )

        assert [e.cidade for e in output.enderecos] == ["Rio de Janeiro", "Belo Horizonte"]

    def test_pessoa_inexistente(self, service):
        with pytest.raises(EntityNotFoundError) as exc_info:
            service.execute(AtualizarPessoaInputDTO(cpf=CPF_A, idade=30))

        assert exc_info.value.kind == MessageKey.CPF_NOT_FOUND

    def test_cpf_nao_pode_ser_alterado(self, service, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A))

        with pytest.raises(ValidationError) as exc_info:
            service.execute(AtualizarPessoaInputDTO(cpf=CPF_A, cpf_informado=CPF_B))

        assert exc_info.value.kind == MessageKey.IMMUTABLE_CPF

    def test_idade_abaixo_da_minima(self, service, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, idade=30))

        with pytest.raises(CamposInvalidosError):
            service.execute(AtualizarPessoaInputDTO(cpf=CPF_A, idade=10))

        assert pessoa_repo.get_by_cpf(CPF_A).idade == 30


class TestConsultas:
    """Testes para ObterPessoaService, ListarPessoasService e ListarPessoasPorIdadeService."""

    def test_obter_pessoa(self, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, idade=40))

        output = ObterPessoaService(pessoa_repo).execute(CPF_A)

        assert output.cpf == CPF_A
        assert output.to_dict()["idade"] == 40

    def test_obter_pessoa_inexistente(self, pessoa_repo):
        with pytest.raises(EntityNotFoundError) as exc_info:
            ObterPessoaService(pessoa_repo).execute(CPF_A)

        assert exc_info.value.kind == MessageKey.CPF_NOT_FOUND

    def test_listar_pessoas_ordenadas_por_cpf(self, pessoa_repo):
        for cpf in (CPF_D, CPF_A, CPF_B):
            pessoa_repo.save(_pessoa(cpf))

        output = ListarPessoasService(pessoa_repo).execute()

        assert [p.cpf for p in output] == sorted([CPF_D, CPF_A, CPF_B])

    def test_por_idade_filtra_e_ordena(self, pessoa_repo):
        for cpf, idade in ((CPF_A, 40), (CPF_B, 16), (CPF_C, 10), (CPF_D, 16)):
            pessoa_repo.save(_pessoa(cpf, idade=idade))

        output = ListarPessoasPorIdadeService(pessoa_repo).execute(16)

        assert [p.idade for p in output] == [16, 16, 40]
        assert [p.cpf for p in output][:2] == sorted([CPF_B, CPF_D])

    def test_por_idade_sem_resultados(self, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, idade=20))
        assert ListarPessoasPorIdadeService(pessoa_repo).execute(21) == []

    @pytest.mark.parametrize("valor", ["16", 16.5, None, True])
    def test_por_idade_exige_inteiro(self, pessoa_repo, valor):
        with pytest.raises(ValidationError) as exc_info:
            ListarPessoasPorIdadeService(pessoa_repo).execute(valor)

        assert exc_info.value.kind == MessageKey.INVALID_AGE_TYPE
        assert exc_info.value.localized_message("en") == "Age must be an integer"


class TestVerificacoes:
    """Testes para VerificarEnderecoService e VerificarCpfExisteService."""

    def test_possui_endereco(self, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, ceps=["01001000"]))
        assert VerificarEnderecoService(pessoa_repo).execute(CPF_A) is True

    def test_endereco_sem_cep_nao_conta(self, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A, ceps=[""]))
        assert VerificarEnderecoService(pessoa_repo).execute(CPF_A) is False

    def test_pessoa_inexistente_nao_possui_endereco(self, pessoa_repo):
        assert VerificarEnderecoService(pessoa_repo).execute(CPF_A) is False

    def test_erro_na_consulta_de_endereco_retorna_false(self, caplog):
        repo = BrokenQueriesRepository()

        assert VerificarEnderecoService(repo).execute(CPF_A) is False
        assert "Erro ao consultar endereço" in caplog.text

    def test_cpf_existe(self, pessoa_repo):
        pessoa_repo.save(_pessoa(CPF_A))

        service = VerificarCpfExisteService(pessoa_repo)
        assert service.execute(CPF_A) is True
        assert service.execute(CPF_B) is False

    def test_erro_na_consulta_de_cpf_retorna_false(self):
        assert VerificarCpfExisteService(BrokenQueriesRepository()).execute(CPF_A) is False


class TestExcluirPessoaService:
    """Testes para ExcluirPessoaService."""

    def test_exclui_pessoa_sem_endereco(self, excluir_service, pessoa_repo, log_repo):
        pessoa_repo.save(_pessoa(CPF_A))

        excluir_service.execute(CPF_A)

        assert pessoa_repo.exists(CPF_A) is False
        logs = log_repo.list_all()
        assert len(logs) == 1
        assert logs[0].cpf == CPF_A

    def test_exclui_pessoa_com_cep_vazio(self, excluir_service, pessoa_repo, log_repo):
        pessoa_repo.save(_pessoa(CPF_A, ceps=[""]))

        excluir_service.execute(CPF_A)

        assert pessoa_repo.exists(CPF_A) is False
        assert len(log_repo.list_all()) == 1

    def test_bloqueia_pessoa_com_endereco(self, excluir_service, pessoa_repo, log_repo, uow):
        pessoa_repo.save(_pessoa(CPF_A, ceps=["01001000"]))

        with pytest.raises(PessoaPossuiEnderecoError) as exc_info:
            excluir_service.execute(CPF_A)

        assert exc_info.value.kind == MessageKey.HAS_ADDRESS
        assert pessoa_repo.exists(CPF_A) is True
        assert log_repo.list_all() == []
        assert uow.commits == 0

    def test_cpf_inexistente(self, excluir_service, log_repo):
        with pytest.raises(EntityNotFoundError) as exc_info:
            excluir_service.execute(CPF_A)

        assert exc_info.value.kind == MessageKey.CPF_NOT_FOUND
        assert log_repo.list_all() == []

    def test_publica_evento(self, excluir_service, pessoa_repo, uow):
        pessoa_repo.save(_pessoa(CPF_A))

        excluir_service.execute(CPF_A)

        events = uow.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], PessoaExcluidaEvent)

    def test_auditoria_em_transacao_propria(self, excluir_service, pessoa_repo, uow, log_uow):
        pessoa_repo.save(_pessoa(CPF_A))

        excluir_service.execute(CPF_A)

        assert uow.commits == 1
        assert log_uow.commits == 1

    def test_falha_na_auditoria_nao_desfaz_exclusao(self, pessoa_repo, uow, caplog):
        pessoa_repo.save(_pessoa(CPF_A))

        def hook_com_falha(cpf):
            raise RuntimeError("tabela de log indisponível")

        service = ExcluirPessoaService(
            pessoa_repo, uow, VerificarEnderecoService(pessoa_repo),
            registrar_exclusao=hook_com_falha,
        )

        service.execute(CPF_A)

        assert pessoa_repo.exists(CPF_A) is False
        assert uow.rolled_back is False
        assert "Falha ao registrar log de exclusão" in caplog.text

    def test_sem_hook_de_auditoria(self, pessoa_repo, uow):
        pessoa_repo.save(_pessoa(CPF_A))
        service = ExcluirPessoaService(pessoa_repo, uow, VerificarEnderecoService(pessoa_repo))

        service.execute(CPF_A)

        assert pessoa_repo.exists(CPF_A) is False


class TestExcluirPessoasEmLoteService:
    """Testes para ExcluirPessoasEmLoteService."""

    def _service(self, pessoa_repo, excluir_service):
        return ExcluirPessoasEmLoteService(
            VerificarCpfExisteService(pessoa_repo),
            VerificarEnderecoService(pessoa_repo),
            excluir_service,
        )

    def test_resultados_na_ordem_da_entrada(self, pessoa_repo, excluir_service, log_repo):
        """A inexistente, B com endereço, C excluível."""
        pessoa_repo.save(_pessoa(CPF_B, ceps=["01001000"]))
        pessoa_repo.save(_pessoa(CPF_C))

        resultados = self._service(pessoa_repo, excluir_service).execute([CPF_A, CPF_B, CPF_C])

        assert [r.cpf for r in resultados] == [CPF_A, CPF_B, CPF_C]
        assert [r.resultado for r in resultados] == [
            MessageKey.CPF_NOT_FOUND,
            MessageKey.HAS_ADDRESS,
            MessageKey.SUCCESS_DELETE,
        ]
        assert pessoa_repo.exists(CPF_B) is True
        assert pessoa_repo.exists(CPF_C) is False
        assert [log.cpf for log in log_repo.list_all()] == [CPF_C]

    def test_lista_vazia(self, pessoa_repo, excluir_service):
        assert self._service(pessoa_repo, excluir_service).execute([]) == []

    def test_exclui_varios_reutilizando_uow(self, pessoa_repo, excluir_service, uow, log_repo):
        for cpf in (CPF_A, CPF_B, CPF_C):
            pessoa_repo.save(_pessoa(cpf))

        resultados = self._service(pessoa_repo, excluir_service).execute([CPF_A, CPF_B, CPF_C])

        assert all(r.sucesso for r in resultados)
        assert uow.commits == 3
        assert len(log_repo.list_all()) == 3

    def test_cpf_repetido(self, pessoa_repo, excluir_service):
        pessoa_repo.save(_pessoa(CPF_A))

        resultados = self._service(pessoa_repo, excluir_service).execute([CPF_A, CPF_A])

        assert [r.resultado for r in resultados] == [
            MessageKey.SUCCESS_DELETE,
            MessageKey.CPF_NOT_FOUND,
        ]

    def test_falha_de_persistencia_com_mensagem(self, uow, registrar_exclusao, log_repo):
        repo = FailingPessoaRepository(RuntimeError("database is locked"))
        repo.save(_pessoa(CPF_A))
        excluir = ExcluirPessoaService(
            repo, uow, VerificarEnderecoService(repo),
            registrar_exclusao=registrar_exclusao.execute,
        )

        resultados = self._service(repo, excluir).execute([CPF_A])

        assert resultados[0].resultado == MessageKey.DELETE_FAILED
        assert resultados[0].detalhe == "database is locked"
        assert resultados[0].to_dict("en") == {"cpf": CPF_A, "message": "database is locked"}
        assert log_repo.list_all() == []

    def test_falha_de_persistencia_sem_mensagem(self, uow):
        repo = FailingPessoaRepository(RuntimeError())
        repo.save(_pessoa(CPF_A))
        excluir = ExcluirPessoaService(repo, uow, VerificarEnderecoService(repo))

        resultado = self._service(repo, excluir).execute([CPF_A])[0]

        assert resultado.resultado == MessageKey.DELETE_FAILED
        assert resultado.detalhe is None
        assert resultado.message("pt") == "Falha ao excluir o cadastro"
        assert resultado.message("en") == "Failed to delete the record"

    def test_mensagens_localizadas(self, pessoa_repo, excluir_service):
        pessoa_repo.save(_pessoa(CPF_C))

        resultados = self._service(pessoa_repo, excluir_service).execute([CPF_A, CPF_C])

        assert [r.to_dict("en")["message"] for r in resultados] == [
            "CPF not found",
            "Record deleted successfully",
        ]
        assert resultados[1].to_dict()["message"] == "Cadastro excluído com sucesso"

    def test_falha_na_verificacao_conta_como_inexistente(self, uow):
        repo = BrokenQueriesRepository()
        excluir = ExcluirPessoaService(repo, uow, VerificarEnderecoService(repo))

        resultados = self._service(repo, excluir).execute([CPF_A])

        assert resultados[0].resultado == MessageKey.CPF_NOT_FOUND


class TestLogExclusoes:
    """Testes para RegistrarExclusaoService e ListarLogExclusoesService."""

    def test_registrar_exclusao(self, registrar_exclusao, log_repo, log_uow):
        registrar_exclusao.execute(CPF_A)

        assert log_uow.committed is True
        assert log_repo.list_all()[0].cpf == CPF_A

    def test_registrar_com_momento_da_exclusao(self, registrar_exclusao, log_repo):
        momento = datetime(2024, 5, 1, 10, 30)

        registrar_exclusao.execute(CPF_A, excluido_em=momento)

        assert log_repo.list_all()[0].excluido_em == momento

    def test_listar_mais_recentes_primeiro(self, log_repo):
        log_repo.add(LogExclusaoEntity.registrar(CPF_A))
        log_repo.add(LogExclusaoEntity.registrar(CPF_B))

        output = ListarLogExclusoesService(log_repo).execute()

        assert [log.cpf for log in output] == [CPF_B, CPF_A]

    def test_filtrar_por_cpf(self, log_repo):
        log_repo.add(LogExclusaoEntity.registrar(CPF_A))
        log_repo.add(LogExclusaoEntity.registrar(CPF_B))

        output = ListarLogExclusoesService(log_repo).execute(CPF_A)

        assert [log.cpf for log in output] == [CPF_A]
        assert output[0].to_dict()["id"] == 1
