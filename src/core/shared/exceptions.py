"""
Exceções de Domínio do Cadastro de Pessoas.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Cada exceção pode carregar uma MessageKey (`kind`). A tradução
para texto localizado acontece apenas na borda (API views).

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── CamposInvalidosError (agrupa vários ValidationError)
    ├── EntityNotFoundError (entidade não existe)
    ├── EntityAlreadyExistsError (chave duplicada)
    ├── BusinessRuleViolationError (regra de negócio violada)
    └── ServicoExternoError (falha em serviço externo, ex: BrasilAPI)
"""

from typing import List, Optional

from .messages import MessageKey, message_for


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(cpf)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        kind: Optional[MessageKey] = None,
    ):
        self.kind = kind
        self.message = message or (message_for(kind) if kind else "")
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def localized_message(self, locale: Optional[str] = None) -> str:
        """Mensagem para o cliente no locale informado."""
        if self.kind is not None:
            return message_for(self.kind, locale)
        return self.message

    def to_dict(self, locale: Optional[str] = None) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.localized_message(locale),
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Example:
        if idade < 16:
            raise ValidationError(kind=MessageKey.WRONG_AGE, field="idade")
    """

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        kind: Optional[MessageKey] = None,
    ):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code, kind)

    def to_dict(self, locale: Optional[str] = None) -> dict:
        result = super().to_dict(locale)
        if self.field:
            result["field"] = self.field
        return result


class CamposInvalidosError(DomainException):
    """
    Um ou mais campos rejeitados pelo validador.

    Carrega todas as violações encontradas para que a API
    responda com um erro por campo.
    """

    def __init__(self, erros: List[ValidationError]):
        self.erros = list(erros)
        primeiro = self.erros[0] if self.erros else None
        super().__init__(
            primeiro.message if primeiro else "Dados inválidos",
            "VALIDATION_ERROR",
            primeiro.kind if primeiro else None,
        )

    def to_dict(self, locale: Optional[str] = None) -> dict:
        result = super().to_dict(locale)
        result["errors"] = [erro.to_dict(locale) for erro in self.erros]
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Example:
        if not repo.exists(cpf):
            raise EntityNotFoundError(
                entity_type="Pessoa", entity_id=cpf, kind=MessageKey.CPF_NOT_FOUND
            )
    """

    def __init__(
        self,
        message: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        kind: Optional[MessageKey] = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND", kind)

    def to_dict(self, locale: Optional[str] = None) -> dict:
        result = super().to_dict(locale)
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class EntityAlreadyExistsError(DomainException):
    """Já existe entidade com a mesma chave."""

    def __init__(
        self,
        message: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            message, "ENTITY_ALREADY_EXISTS", MessageKey.ENTITY_ALREADY_EXISTS
        )


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Lançada quando uma operação viola uma regra de negócio
    estabelecida no domínio.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        rule: Optional[str] = None,
        kind: Optional[MessageKey] = None,
    ):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION", kind)

    def to_dict(self, locale: Optional[str] = None) -> dict:
        result = super().to_dict(locale)
        if self.rule:
            result["rule"] = self.rule
        return result


class PessoaPossuiEnderecoError(BusinessRuleViolationError):
    """Exclusão bloqueada: a pessoa possui endereço com CEP."""

    def __init__(self, cpf: str):
        self.cpf = cpf
        super().__init__(
            f"CPF {cpf} possui endereço cadastrado",
            rule="pessoa_com_endereco_nao_exclui",
            kind=MessageKey.HAS_ADDRESS,
        )


class ServicoExternoError(DomainException):
    """
    Falha em serviço externo (ex: consulta de CEP).

    Preserva o status e a mensagem do upstream. Sem mensagem,
    a borda usa o texto localizado de `kind`.

    Attributes:
        status_code: Status HTTP a devolver ao cliente (padrão 500)
        upstream_message: Mensagem original do serviço externo
    """

    def __init__(
        self,
        status_code: Optional[int] = None,
        upstream_message: Optional[str] = None,
        kind: MessageKey = MessageKey.API_CEP_ERROR,
    ):
        self.status_code = status_code or 500
        self.upstream_message = upstream_message
        super().__init__(upstream_message, "EXTERNAL_SERVICE_ERROR", kind)

    def localized_message(self, locale: Optional[str] = None) -> str:
        if self.upstream_message:
            return self.upstream_message
        return super().localized_message(locale)
