"""
Domínio de Pessoas.

Cadastro de pessoas identificadas por CPF, com endereços
enriquecidos pelo CEP, exclusão protegida e trilha de auditoria.
"""

from .entities import EnderecoEntity, LogExclusaoEntity, PessoaEntity
from .validators import IDADE_MINIMA, validar_campos, validar_cpf

__all__ = [
    "EnderecoEntity",
    "LogExclusaoEntity",
    "PessoaEntity",
    "IDADE_MINIMA",
    "validar_campos",
    "validar_cpf",
]
