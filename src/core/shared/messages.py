"""
Catálogo de Mensagens Localizadas.

Cada erro ou resultado de negócio é identificado por uma MessageKey.
A tradução para texto acontece uma única vez, na borda (API views),
usando o locale da requisição.

Locales suportados:
- pt (padrão)
- en

Example:
    message_for(MessageKey.WRONG_AGE, "en-US")
    # 'Age must be at least 16 years'
"""

from enum import Enum
from typing import Dict, Optional


class MessageKey(str, Enum):
    """Chaves de mensagens de negócio."""

    WRONG_AGE = "WRONG_AGE"
    WRONG_CPF = "WRONG_CPF"
    IMMUTABLE_CPF = "IMMUTABLE_CPF"
    API_CEP_ERROR = "API_CEP_ERROR"
    CPF_NOT_FOUND = "CPF_NOT_FOUND"
    HAS_ADDRESS = "HAS_ADDRESS"
    SUCCESS_DELETE = "SUCCESS_DELETE"
    DELETE_FAILED = "DELETE_FAILED"
    ENTITY_ALREADY_EXISTS = "ENTITY_ALREADY_EXISTS"
    INVALID_JSON = "INVALID_JSON"
    INVALID_BODY = "INVALID_BODY"
    INVALID_AGE_TYPE = "INVALID_AGE_TYPE"
    INVALID_ADDRESSES = "INVALID_ADDRESSES"
    INVALID_CEP = "INVALID_CEP"
    INVALID_CPF_LIST = "INVALID_CPF_LIST"


DEFAULT_LOCALE = "pt"

MESSAGES: Dict[str, Dict[MessageKey, str]] = {
    "pt": {
        MessageKey.WRONG_AGE: "A idade mínima para cadastro é de 16 anos",
        MessageKey.WRONG_CPF: "CPF inválido",
        MessageKey.IMMUTABLE_CPF: "O CPF não pode ser alterado",
        MessageKey.API_CEP_ERROR: "Erro ao consultar o CEP na BrasilAPI",
        MessageKey.CPF_NOT_FOUND: "CPF não encontrado",
        MessageKey.HAS_ADDRESS: "Não é possível excluir: a pessoa possui endereço cadastrado",
        MessageKey.SUCCESS_DELETE: "Cadastro excluído com sucesso",
        MessageKey.DELETE_FAILED: "Falha ao excluir o cadastro",
        MessageKey.ENTITY_ALREADY_EXISTS: "Já existe um cadastro com este CPF",
        MessageKey.INVALID_JSON: "JSON inválido no corpo da requisição",
        MessageKey.INVALID_BODY: "O corpo da requisição deve ser um objeto JSON",
        MessageKey.INVALID_AGE_TYPE: "Idade deve ser um número inteiro",
        MessageKey.INVALID_ADDRESSES: "Endereços devem ser uma lista de objetos com CEP",
        MessageKey.INVALID_CEP: "CEP inválido",
        MessageKey.INVALID_CPF_LIST: "Informe 'cpfs' como uma lista de CPFs",
    },
    "en": {
        MessageKey.WRONG_AGE: "Age must be at least 16 years",
        MessageKey.WRONG_CPF: "Invalid CPF",
        MessageKey.IMMUTABLE_CPF: "CPF cannot be changed",
        MessageKey.API_CEP_ERROR: "Error looking up the postal code on BrasilAPI",
        MessageKey.CPF_NOT_FOUND: "CPF not found",
        MessageKey.HAS_ADDRESS: "Cannot delete: the person has a registered address",
        MessageKey.SUCCESS_DELETE: "Record deleted successfully",
        MessageKey.DELETE_FAILED: "Failed to delete the record",
        MessageKey.ENTITY_ALREADY_EXISTS: "A record with this CPF already exists",
        MessageKey.INVALID_JSON: "Invalid JSON in the request body",
        MessageKey.INVALID_BODY: "The request body must be a JSON object",
        MessageKey.INVALID_AGE_TYPE: "Age must be an integer",
        MessageKey.INVALID_ADDRESSES: "Addresses must be a list of objects with a CEP",
        MessageKey.INVALID_CEP: "Invalid CEP",
        MessageKey.INVALID_CPF_LIST: "Send 'cpfs' as a list of CPFs",
    },
}


def normalize_locale(locale: Optional[str]) -> str:
    """
    Reduz o locale ao idioma base suportado.

    "pt-br", "pt_BR" e "PT" viram "pt"; idiomas sem catálogo
    caem no DEFAULT_LOCALE.
    """
    if not locale:
        return DEFAULT_LOCALE

    idioma = locale.replace("_", "-").split("-")[0].lower()
    return idioma if idioma in MESSAGES else DEFAULT_LOCALE


def message_for(key: MessageKey, locale: Optional[str] = None) -> str:
    """
    Retorna o texto da mensagem no locale pedido.

    Args:
        key: Chave da mensagem
        locale: Locale da requisição (ex: "pt-br", "en")

    Returns:
        Texto localizado (ou o texto do locale padrão se faltar tradução)
    """
    catalogo = MESSAGES[normalize_locale(locale)]
    return catalogo.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key.value)
