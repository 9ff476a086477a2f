"""
Login error taxonomy and the JSON error boundary.
Each failure cause is its own exception so callers can tell them apart; the callback
route redirects on exchange failures, everything else lands in the handlers below.
"""
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LoginError(Exception):
    """Base for failures in the login flow. status_code is used by the error boundary."""

    status_code = 500
    reason = "login_error"


class TokenExchangeError(LoginError):
    """Failures before or during the code-for-token exchange; the callback recovers from these."""

    log_level = logging.WARNING


class MissingCodeError(TokenExchangeError):
    status_code = 400
    reason = "missing_code"
    log_level = logging.INFO

    def __init__(self, message: str = "Authorization code missing from callback"):
        super().__init__(message)


class ProviderDeniedError(TokenExchangeError):
    """Provider redirected back with ?error=... (e.g. the user declined consent)."""

    status_code = 403
    reason = "access_denied"

    def __init__(self, error: str, description: str | None = None):
        self.error = error
        self.description = description
        super().__init__(f"Provider returned error={error}" + (f": {description}" if description else ""))


class TokenEndpointError(TokenExchangeError):
    """Token endpoint answered, but not with a usable token response."""

    status_code = 502
    reason = "token_endpoint_error"

    def __init__(self, message: str, provider_status: int | None = None):
        self.provider_status = provider_status
        super().__init__(message)


class ProviderUnavailableError(TokenExchangeError):
    """Transport failure or timeout talking to the token endpoint."""

    status_code = 503
    reason = "provider_unavailable"
    log_level = logging.ERROR


class InvalidIdentityTokenError(LoginError):
    """id_token could not be decoded. Not recovered by the callback."""

    status_code = 502
    reason = "invalid_identity_token"


def error_body(exc: Exception, status_code: int, reason: str, include_stack: bool) -> dict:
    body = {"error": reason, "message": str(exc) or exc.__class__.__name__, "status": status_code}
    if include_stack:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def _include_stack(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is None or not settings.is_prod


async def login_error_handler(request: Request, exc: LoginError) -> JSONResponse:
    logger.warning("%s on %s %s: %s", exc.reason, request.method, request.url.path, exc)
    return JSONResponse(
        error_body(exc, exc.status_code, exc.reason, _include_stack(request)),
        status_code=exc.status_code,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int) or not 400 <= status_code < 600:
        status_code = 500
    return JSONResponse(
        error_body(exc, status_code, "internal_error", _include_stack(request)),
        status_code=status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoginError, login_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
