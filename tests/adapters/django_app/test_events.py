"""
Testes para Event Publishers e Handlers Celery.

As tasks Celery não são enfileiradas: `.delay` é substituído por Mock
ou pela execução direta (`.run`), como um worker faria.
"""

from datetime import datetime
import logging

import pytest
from unittest.mock import patch
from django.test import Client
from django.utils import timezone

from src.core.pessoas.events import (
    PessoaAtualizadaEvent,
    PessoaCriadaEvent,
    PessoaExcluidaEvent,
)
from src.adapters.django_app.events import handlers
from src.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    InMemoryEventPublisher,
    LoggingEventPublisher,
    get_event_publisher,
)
from src.adapters.django_app.pessoas.models import LogExclusaoModel, PessoaModel
from src.config.container import create_testing_container, get_container
from src.core.shared.exceptions import ValidationError


@pytest.fixture
def evento():
    return PessoaCriadaEvent(aggregate_id="11144477735", idade=30, total_enderecos=1)


class TestGetEventPublisher:

    def test_padrao_logging(self):
        assert isinstance(get_event_publisher(), LoggingEventPublisher)

    def test_modo_celery(self):
        assert isinstance(get_event_publisher("CELERY"), CeleryEventPublisher)

    @pytest.mark.parametrize("mode", ["", None, "kafka"])
    def test_modo_desconhecido_usa_logging(self, mode):
        assert isinstance(get_event_publisher(mode), LoggingEventPublisher)


class TestLoggingEventPublisher:

    def test_loga_evento(self, evento, caplog):
        with caplog.at_level(logging.INFO):
            LoggingEventPublisher().publish(evento)

        assert "[EVENT] PessoaCriadaEvent" in caplog.text
        assert "11144477735" in caplog.text


class TestCeleryEventPublisher:

    def test_envia_para_dispatcher(self, evento):
        with patch.object(handlers.dispatch_domain_event, "delay") as mock_delay:
            CeleryEventPublisher(also_log=False).publish(evento)

        event_type, event_data = mock_delay.call_args.args
        assert event_type == "PessoaCriadaEvent"
        assert event_data["aggregate_id"] == "11144477735"
        assert event_data["data"]["total_enderecos"] == 1

    def test_falha_no_broker_nao_propaga(self, evento, caplog):
        with patch.object(
            handlers.dispatch_domain_event, "delay", side_effect=ConnectionError("broker")
        ):
            CeleryEventPublisher().publish(evento)

        assert "Falha ao publicar evento no Celery" in caplog.text


class TestInMemoryEventPublisher:

    def test_armazena_e_filtra(self, evento):
        publisher = InMemoryEventPublisher()
        publisher.publish(evento)
        publisher.publish(PessoaExcluidaEvent(aggregate_id="52998224725"))

        assert len(publisher.published_events) == 2
        assert publisher.get_events_by_type("PessoaExcluidaEvent")[0].aggregate_id == "52998224725"

        publisher.clear()
        assert publisher.published_events == []


class TestHandlers:

    def test_dispatcher_roteia_exclusao_para_handler(self):
        evento = PessoaExcluidaEvent(aggregate_id="11144477735")

        with patch.object(handlers.handle_pessoa_excluida, "delay") as mock_delay:
            handlers.dispatch_domain_event.run("PessoaExcluidaEvent", evento.to_dict())

        mock_delay.assert_called_once_with(evento.to_dict())

    @pytest.mark.parametrize("evento", [
        PessoaCriadaEvent(aggregate_id="11144477735", idade=30),
        PessoaAtualizadaEvent(aggregate_id="11144477735", campos=("idade",)),
    ])
    def test_eventos_sem_handler_nao_enfileiram(self, evento):
        with patch.object(handlers.handle_pessoa_excluida, "delay") as mock_delay:
            handlers.dispatch_domain_event.run(evento.event_type, evento.to_dict())

        mock_delay.assert_not_called()

    def test_handler_com_retentativa(self):
        assert handlers.handle_pessoa_excluida.autoretry_for == (Exception,)
        assert handlers.handle_pessoa_excluida.max_retries == 5

    @pytest.mark.django_db
    def test_handler_pessoa_excluida_grava_log(self):
        evento = PessoaExcluidaEvent(
            aggregate_id="11144477735",
            occurred_at=datetime(2024, 5, 1, 10, 30),
        )

        handlers.handle_pessoa_excluida.run(evento.to_dict())

        log = LogExclusaoModel.objects.get()
        assert log.cpf == "11144477735"
        assert log.excluido_em == timezone.make_aware(datetime(2024, 5, 1, 10, 30))

    @pytest.mark.django_db
    def test_handler_sem_cpf_falha_para_retentar(self):
        with pytest.raises(ValidationError):
            handlers.handle_pessoa_excluida.run({"occurred_at": "2024-05-01T10:30:00"})

        assert LogExclusaoModel.objects.count() == 0


class TestRegistroExclusaoPorModo:

    def test_modo_logging_grava_na_requisicao(self):
        service = create_testing_container().excluir_pessoa_service()

        assert callable(service.registrar_exclusao)

    def test_modo_celery_deixa_log_para_o_handler(self):
        service = create_testing_container(event_publisher_mode="celery").excluir_pessoa_service()

        assert service.registrar_exclusao is None


@pytest.mark.django_db
class TestExclusaoAuditadaPeloWorker:
    """DELETE real com EVENT_PUBLISHER_MODE=celery; o worker roda em linha."""

    @pytest.fixture(autouse=True)
    def modo_celery(self, settings):
        settings.EVENT_PUBLISHER_MODE = "celery"

    @pytest.fixture
    def worker(self):
        def _dispatch(event_type, event_data):
            handlers.dispatch_domain_event.run(event_type, event_data)

        with patch.object(handlers.dispatch_domain_event, "delay", side_effect=_dispatch), \
                patch.object(handlers.handle_pessoa_excluida, "delay",
                             side_effect=handlers.handle_pessoa_excluida.run):
            yield

    def test_log_gravado_uma_vez_pelo_handler(self, worker):
        assert isinstance(get_container().event_publisher(), CeleryEventPublisher)
        PessoaModel.objects.create(cpf="11144477735", idade=30)

        response = Client().delete("/pessoas/api/11144477735/")

        assert response.status_code == 200
        assert list(LogExclusaoModel.objects.values_list("cpf", flat=True)) == ["11144477735"]

    def test_broker_fora_do_ar_nao_desfaz_exclusao(self, caplog):
        PessoaModel.objects.create(cpf="11144477735", idade=30)

        with patch.object(
            handlers.dispatch_domain_event, "delay", side_effect=ConnectionError("broker")
        ):
            response = Client().delete("/pessoas/api/11144477735/")

        assert response.status_code == 200
        assert not PessoaModel.objects.filter(cpf="11144477735").exists()
        assert "Falha ao publicar evento no Celery" in caplog.text
