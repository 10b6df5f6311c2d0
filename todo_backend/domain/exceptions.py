from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class DuplicateEmailError(DomainError):
    """Ja existe um usuario com o email informado."""


class UserNotFoundError(DomainError):
    """Usuario solicitado nao existe."""


class InvalidCredentialsError(DomainError):
    """Senha nao confere com a conta informada."""


class ExternalAuthError(DomainError):
    """Falha de rede ou de parse ao falar com o provedor externo."""


class TokenInvalidError(DomainError):
    """Token com assinatura invalida ou expirado."""
