"""
API Views JSON para o domínio de Pessoas.

Endpoints:
- GET /pessoas/api/ - Listar pessoas
- POST /pessoas/api/ - Cadastrar pessoa
- GET /pessoas/api/<cpf>/ - Obter pessoa
- PATCH|PUT /pessoas/api/<cpf>/ - Atualizar pessoa
- DELETE /pessoas/api/<cpf>/ - Excluir pessoa (sem endereço)
- GET /pessoas/api/<cpf>/has-address/ - Pessoa possui endereço?
- POST /pessoas/api/bulk-delete/ - Excluir lista de CPFs
- GET /pessoas/api/por-idade/?idade=N - Pessoas com idade >= N
- GET /pessoas/api/log-exclusoes/ - Trilha de auditoria

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error, meta}
- Mensagens no idioma do request (Accept-Language), padrão pt
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from django.views import View
from django.http import JsonResponse, HttpRequest
from django.utils import translation
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt

from src.core.pessoas.dtos import (
    AtualizarPessoaInputDTO,
    CriarPessoaInputDTO,
    EnderecoInputDTO,
)
from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    CamposInvalidosError,
    DomainException,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    ServicoExternoError,
    ValidationError,
)
from src.core.shared.messages import MessageKey, message_for, normalize_locale
from src.config.container import get_container

logger = logging.getLogger(__name__)

CEP_MAX_LENGTH = 9


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status, json_dumps_params={'ensure_ascii': False})


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON inválido no corpo da requisição: {e}")
        raise ValidationError(f"JSON inválido: {e}", kind=MessageKey.INVALID_JSON) from e

    if not isinstance(data, dict):
        raise ValidationError(kind=MessageKey.INVALID_BODY)

    return data


def get_locale(request: HttpRequest) -> str:
    """Idioma das mensagens: Accept-Language / cookie, padrão LANGUAGE_CODE."""
    return normalize_locale(translation.get_language_from_request(request))


def parse_idade(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field="idade", kind=MessageKey.INVALID_AGE_TYPE)
    return value


def parse_cep(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(field="enderecos", kind=MessageKey.INVALID_CEP)

    cep = str(value).strip()
    if not cep:
        return None
    # Cabe na coluna do banco: "01001000" ou "01001-000"
    if len(cep) > CEP_MAX_LENGTH:
        raise ValidationError(field="enderecos", kind=MessageKey.INVALID_CEP)
    return cep


def parse_enderecos(value: Any) -> Optional[Tuple[EnderecoInputDTO, ...]]:
    """
    Converte a lista de endereços da requisição.

    Cada item deve ser um objeto com a chave "CEP". O CEP chega sem
    espaços nas pontas; em branco conta como endereço sem CEP.
    """
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError(field="enderecos", kind=MessageKey.INVALID_ADDRESSES)

    enderecos = []
    for item in value:
        if not isinstance(item, dict):
            raise ValidationError(field="enderecos", kind=MessageKey.INVALID_ADDRESSES)
        enderecos.append(EnderecoInputDTO(cep=parse_cep(item.get('CEP', item.get('cep')))))

    return tuple(enderecos)


def parse_cpfs(value: Any) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(cpf, str) for cpf in value):
        raise ValidationError(field="cpfs", kind=MessageKey.INVALID_CPF_LIST)
    return value


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tradução de exceções para status HTTP e mensagem localizada
    """

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except Exception as e:
            return self.handle_exception(e, request)

    def handle_exception(self, e: Exception, request: HttpRequest) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Único ponto de tradução: classe da exceção → status HTTP,
        `kind` → mensagem no idioma do request.
        """
        locale = get_locale(request)

        if isinstance(e, CamposInvalidosError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=400,
                meta={'errors': [erro.to_dict(locale) for erro in e.erros]}
            )

        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=400,
                meta={'field': e.field}
            )

        if isinstance(e, EntityNotFoundError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=404
            )

        if isinstance(e, EntityAlreadyExistsError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=409
            )

        if isinstance(e, BusinessRuleViolationError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=422,
                meta={'rule': e.rule}
            )

        if isinstance(e, ServicoExternoError):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=e.status_code
            )

        if isinstance(e, DomainException):
            return json_response(
                success=False,
                error=e.localized_message(locale),
                status=400
            )

        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


# =============================================================================
# Pessoa API Views
# =============================================================================

class PessoaAPIListView(BaseAPIView):
    """
    GET /pessoas/api/ - Lista pessoas
    POST /pessoas/api/ - Cadastra pessoa
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        pessoas = self.get_service('listar_pessoas_service').execute()

        return json_response(
            success=True,
            data=[p.to_dict() for p in pessoas],
            meta={'total': len(pessoas)}
        )

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
            {"cpf": "11144477735", "idade": 30, "enderecos": [{"CEP": "01001000"}]}
        """
        data = self.parse_body(request)

        input_dto = CriarPessoaInputDTO(
            cpf=data.get('cpf'),
            idade=parse_idade(data.get('idade')),
            enderecos=parse_enderecos(data.get('enderecos')),
        )

        output = self.get_service('criar_pessoa_service').execute(input_dto)

        return json_response(success=True, data=output.to_dict(), status=201)


class PessoaAPIDetailView(BaseAPIView):
    """
    GET /pessoas/api/<cpf>/ - Obtém pessoa
    PATCH|PUT /pessoas/api/<cpf>/ - Atualiza idade/endereços
    DELETE /pessoas/api/<cpf>/ - Exclui pessoa
    """

    def get(self, request: HttpRequest, cpf: str) -> JsonResponse:
        output = self.get_service('obter_pessoa_service').execute(cpf)
        return json_response(success=True, data=output.to_dict())

    def patch(self, request: HttpRequest, cpf: str) -> JsonResponse:
        data = self.parse_body(request)

        input_dto = AtualizarPessoaInputDTO(
            cpf=cpf,
            idade=parse_idade(data.get('idade')),
            enderecos=parse_enderecos(data.get('enderecos')),
            cpf_informado=data.get('cpf'),
        )

        output = self.get_service('atualizar_pessoa_service').execute(input_dto)

        return json_response(success=True, data=output.to_dict())

    def put(self, request: HttpRequest, cpf: str) -> JsonResponse:
        return self.patch(request, cpf)

    def delete(self, request: HttpRequest, cpf: str) -> JsonResponse:
        self.get_service('excluir_pessoa_service').execute(cpf)

        return json_response(
            success=True,
            data={
                'cpf': cpf,
                'message': message_for(MessageKey.SUCCESS_DELETE, get_locale(request)),
            }
        )


class PessoaAPIHasAddressView(BaseAPIView):
    """GET /pessoas/api/<cpf>/has-address/ - True se possui endereço com CEP."""

    def get(self, request: HttpRequest, cpf: str) -> JsonResponse:
        possui = self.get_service('verificar_endereco_service').execute(cpf)
        return json_response(success=True, data=possui)


class PessoaAPIBulkDeleteView(BaseAPIView):
    """
    POST /pessoas/api/bulk-delete/

    Body JSON:
        {"cpfs": ["11144477735", "52998224725"]}

    Responde um resultado por CPF, na ordem recebida.
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        data = self.parse_body(request)
        cpfs = parse_cpfs(data.get('cpfs'))

        resultados = self.get_service('excluir_pessoas_em_lote_service').execute(cpfs)

        locale = get_locale(request)
        return json_response(
            success=True,
            data=[r.to_dict(locale) for r in resultados],
            meta={
                'total': len(resultados),
                'excluidos': sum(1 for r in resultados if r.sucesso),
            }
        )


class PessoaAPIPorIdadeView(BaseAPIView):
    """GET /pessoas/api/por-idade/?idade=N - Pessoas com idade >= N, da mais nova à mais velha."""

    def get(self, request: HttpRequest) -> JsonResponse:
        valor = request.GET.get('idade')

        try:
            idade = int(valor)
        except (TypeError, ValueError):
            raise ValidationError(field="idade", kind=MessageKey.INVALID_AGE_TYPE)

        pessoas = self.get_service('listar_pessoas_por_idade_service').execute(idade)

        return json_response(
            success=True,
            data=[p.to_dict() for p in pessoas],
            meta={'total': len(pessoas), 'idade_minima': idade}
        )


class LogExclusaoAPIListView(BaseAPIView):
    """GET /pessoas/api/log-exclusoes/?cpf= - Registros de exclusão, mais recentes primeiro."""

    def get(self, request: HttpRequest) -> JsonResponse:
        cpf = request.GET.get('cpf') or None
        logs = self.get_service('listar_log_exclusoes_service').execute(cpf)

        return json_response(
            success=True,
            data=[log.to_dict() for log in logs],
            meta={'total': len(logs)}
        )
