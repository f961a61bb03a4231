"""
Testes para o cliente da BrasilAPI.

A sessão HTTP é substituída por um Mock: nenhuma chamada de rede.
"""

import pytest
from unittest.mock import Mock

import requests

from src.adapters.http.brasil_api import BrasilApiCepClient, DEFAULT_TIMEOUT
from src.core.pessoas.ports import CepGateway, CepLookupError


def _response(status_code=200, json_data=None, text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return BrasilApiCepClient(base_url="https://brasilapi.test/api/", timeout=3, session=session)


class TestBrasilApiCepClient:

    def test_implementa_cep_gateway(self, client):
        assert isinstance(client, CepGateway)

    def test_timeout_padrao(self, session):
        assert BrasilApiCepClient(session=session).timeout == DEFAULT_TIMEOUT

    def test_consulta_sucesso(self, client, session):
        session.get.return_value = _response(json_data={
            "cep": "01001000",
            "state": "SP",
            "city": "São Paulo",
            "neighborhood": "Sé",
            "street": "Praça da Sé",
            "service": "open-cep",
        })

        info = client.consultar("01001000")

        session.get.assert_called_once_with(
            "https://brasilapi.test/api/cep/v1/01001000", timeout=3
        )
        assert (info.cep, info.state, info.city, info.street) == (
            "01001000", "SP", "São Paulo", "Praça da Sé"
        )

    def test_cep_sem_rua(self, client, session):
        session.get.return_value = _response(json_data={"state": "SP", "city": "Campinas"})

        info = client.consultar("13000000")

        assert info.cep == "13000000"
        assert info.street is None

    def test_cep_nao_encontrado(self, client, session):
        session.get.return_value = _response(
            404, {"message": "Todos os serviços de CEP retornaram erro.", "type": "service_error"}
        )

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("00000000")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Todos os serviços de CEP retornaram erro."

    def test_cep_malformado(self, client, session):
        session.get.return_value = _response(
            400, {"message": "CEP deve conter exatamente 8 caracteres."}
        )

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("123")

        assert exc_info.value.status_code == 400

    def test_erro_sem_json_usa_texto(self, client, session):
        session.get.return_value = _response(500, ValueError("no json"), text="Internal Server Error")

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("01001000")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"

    def test_timeout(self, client, session):
        session.get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("01001000")

        assert exc_info.value.status_code == 504

    def test_falha_de_conexao(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("01001000")

        assert exc_info.value.status_code == 502

    def test_resposta_invalida(self, client, session):
        session.get.return_value = _response(200, ValueError("bad json"))

        with pytest.raises(CepLookupError) as exc_info:
            client.consultar("01001000")

        assert exc_info.value.status_code == 502
