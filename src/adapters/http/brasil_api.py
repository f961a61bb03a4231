"""
Cliente HTTP da BrasilAPI (consulta de CEP).

Implementa o port CepGateway:
    GET {base_url}/cep/v1/{cep} -> {"cep", "state", "city", "street", ...}

Erros da API são convertidos em CepLookupError preservando
o status HTTP e o campo "message" da resposta.
"""

import logging
from typing import Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from src.core.pessoas.ports import CepInfo, CepLookupError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://brasilapi.com.br/api"
DEFAULT_TIMEOUT = 10


class BrasilApiCepClient:
    """
    Consulta de CEP na BrasilAPI.

    Uma única tentativa por CEP, com timeout configurável.

    Example:
        client = BrasilApiCepClient(timeout=5)
        info = client.consultar("01001000")
        info.city  # "São Paulo"
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.session = session or requests.Session()

    def consultar(self, cep: str) -> CepInfo:
        url = f"{self.base_url}/cep/v1/{cep}"

        try:
            response = self.session.get(url, timeout=self.timeout)
        except Timeout as e:
            logger.error(f"Timeout ao consultar CEP {cep} ({self.timeout}s)")
            raise CepLookupError(f"Tempo esgotado ao consultar o CEP {cep}", status_code=504) from e
        except ConnectionError as e:
            logger.error(f"Falha de conexão com a BrasilAPI: {e}")
            raise CepLookupError("Serviço de CEP indisponível", status_code=502) from e
        except RequestException as e:
            logger.error(f"Erro na requisição à BrasilAPI: {e}")
            raise CepLookupError(str(e) or None, status_code=502) from e

        if not response.ok:
            raise CepLookupError(
                self._mensagem_erro(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CepLookupError("Resposta inválida do serviço de CEP", status_code=502) from e

        return CepInfo(
            cep=data.get("cep") or cep,
            state=data.get("state"),
            city=data.get("city"),
            street=data.get("street"),
        )

    @staticmethod
    def _mensagem_erro(response: requests.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return response.text or None

        if isinstance(data, dict):
            return data.get("message")
        return None
