"""
Failure taxonomy for instrument lookups.

Every failure is terminal for the lookup that raised it. The web layer maps
``status_code`` and ``message`` straight onto the JSON error response.
"""

from __future__ import annotations

from typing import Optional


class LookupFailure(Exception):
    """Base exception for a failed (category, ticker) lookup."""

    kind: str = "internal"
    status_code: int = 500
    message: str = "Erro interno ao buscar dados."

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingParameterError(LookupFailure):
    """Raised when the category or the ticker is empty."""

    kind = "missing_parameter"
    status_code = 400
    message = "Parâmetros 'type' e 'ticker' são obrigatórios."


class NotFoundError(LookupFailure):
    """Raised when the page carries no instrument heading."""

    kind = "not_found"
    status_code = 404
    message = "Nenhum dado encontrado para o ticker informado."


class UpstreamError(LookupFailure):
    """Raised when the upstream site answers with a non-2xx status."""

    kind = "upstream_error"

    def __init__(self, status: int, reason: Optional[str] = None) -> None:
        self.status = status
        self.reason = reason or ""
        # non-error statuses (unfollowed redirects) cannot be mirrored as-is
        self.status_code = status if 400 <= status <= 599 else 502
        super().__init__(f"Erro ao buscar dados externos: {status} - {self.reason}")


class TransportError(LookupFailure):
    """Raised on DNS, connection or timeout failures."""

    kind = "transport_error"


class ParseError(LookupFailure):
    """Raised when the response body cannot be decoded or parsed at all."""

    kind = "parse_error"
