"""
Validadores do Domínio de Pessoas.

- validar_cpf: dígitos verificadores do CPF
- validar_campos: regras de entrada (idade mínima, CPF) para
  criação e atualização
"""

import logging
from typing import Any, List, Optional

from src.core.shared.exceptions import ValidationError
from src.core.shared.messages import MessageKey

logger = logging.getLogger(__name__)

IDADE_MINIMA = 16
CPF_TAMANHO = 11


def _digito_verificador(digitos: List[int], peso_inicial: int) -> int:
    soma = sum(
        digito * peso
        for digito, peso in zip(digitos, range(peso_inicial, 1, -1))
    )
    resto = (soma * 10) % 11
    return 0 if resto in (10, 11) else resto


def validar_cpf(cpf: Any) -> bool:
    """
    Valida o CPF pelo tamanho, repetição de dígitos e os dois
    dígitos verificadores.

    Nunca lança exceção: qualquer entrada malformada retorna False.

    Args:
        cpf: CPF com exatamente 11 dígitos, sem máscara

    Returns:
        True se o CPF for válido

    Example:
        validar_cpf("11144477735")  # True
        validar_cpf("11111111111")  # False
    """
    if not isinstance(cpf, str):
        return False

    if (
        len(cpf) != CPF_TAMANHO
        or not (cpf.isascii() and cpf.isdigit())
        or cpf == cpf[0] * CPF_TAMANHO
    ):
        logger.warning(f"CPF inválido: {cpf}")
        return False

    digitos = [int(c) for c in cpf]

    if _digito_verificador(digitos[:9], 10) != digitos[9]:
        logger.warning(f"CPF com primeiro dígito verificador inválido: {cpf}")
        return False

    if _digito_verificador(digitos[:10], 11) != digitos[10]:
        logger.warning(f"CPF com segundo dígito verificador inválido: {cpf}")
        return False

    return True


def validar_campos(
    cpf: Optional[str] = None,
    idade: Optional[int] = None,
    idade_minima: int = IDADE_MINIMA,
) -> List[ValidationError]:
    """
    Valida os campos de entrada de uma pessoa.

    Campos ausentes (None) não são validados.

    Returns:
        Lista de erros encontrados (vazia se tudo válido)
    """
    logger.info("Validando dados de entrada")
    erros: List[ValidationError] = []

    if idade is not None and idade < idade_minima:
        erros.append(ValidationError(field="idade", kind=MessageKey.WRONG_AGE))

    if cpf is not None and not validar_cpf(cpf):
        erros.append(ValidationError(field="cpf", kind=MessageKey.WRONG_CPF))

    return erros
