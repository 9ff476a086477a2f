"""
Authorization code flow against Google: build the authorize URL, exchange the code,
decode the id_token.

Simplifications kept on purpose for this demo (do not reuse as-is):
- no `state` parameter, so the callback has no CSRF protection;
- the id_token signature is NOT verified; claims are read straight from the payload.
"""
import logging
from dataclasses import asdict, dataclass
from urllib.parse import urlencode

import httpx
import jwt

from google_login.config import Settings
from google_login.errors import (
    InvalidIdentityTokenError,
    MissingCodeError,
    ProviderUnavailableError,
    TokenEndpointError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationRequest:
    client_id: str
    redirect_uri: str
    scope: str
    access_type: str = "offline"
    response_type: str = "code"

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthorizationRequest":
        return cls(
            client_id=settings.client_id,
            redirect_uri=settings.redirect_uri,
            scope=" ".join(settings.scopes),
            access_type=settings.access_type,
        )

    def query_params(self) -> dict[str, str]:
        return {
            "response_type": self.response_type,
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "access_type": self.access_type,
        }


@dataclass(frozen=True)
class TokenBundle:
    access_token: str
    expires_in: int
    refresh_token: str
    scope: str
    token_type: str
    id_token: str


@dataclass(frozen=True)
class IdentityClaims:
    iss: str = ""
    aud: str = ""
    sub: str = ""
    email: str = ""
    email_verified: bool = False
    name: str = ""
    picture: str = ""
    locale: str = ""
    iat: int = 0
    exp: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def build_authorization_url(settings: Settings) -> str:
    """Provider authorize URL for the configured client. Pure and deterministic."""
    request = AuthorizationRequest.from_settings(settings)
    return f"{settings.auth_endpoint}?{urlencode(request.query_params())}"


def exchange_code_for_tokens(settings: Settings, code: str | None) -> TokenBundle:
    """
    POST the authorization code to the token endpoint and return the token bundle.
    Raises MissingCodeError (no request made), ProviderUnavailableError or TokenEndpointError.
    """
    if not code:
        raise MissingCodeError()

    try:
        r = httpx.post(
            settings.token_endpoint,
            data={
                "code": code,
                "client_id": settings.client_id,
                "client_secret": settings.client_secret,
                "redirect_uri": settings.redirect_uri,
                "grant_type": "authorization_code",
            },
            headers={"Accept": "application/json"},
            timeout=settings.token_timeout,
        )
    except httpx.TimeoutException as e:
        raise ProviderUnavailableError(f"Token endpoint timed out after {settings.token_timeout}s") from e
    except httpx.RequestError as e:
        raise ProviderUnavailableError(f"Token endpoint unreachable: {e}") from e

    if not 200 <= r.status_code < 300:
        err = {}
        if r.headers.get("content-type", "").startswith("application/json"):
            try:
                err = r.json()
            except ValueError:
                err = {}
        if not isinstance(err, dict):
            err = {}
        err_desc = err.get("error_description") or err.get("error") or "no detail"
        raise TokenEndpointError(
            f"Token endpoint returned {r.status_code}: {err_desc}",
            provider_status=r.status_code,
        )

    try:
        data = r.json()
    except ValueError as e:
        raise TokenEndpointError("Token endpoint returned a non-JSON body", provider_status=r.status_code) from e
    if not isinstance(data, dict):
        raise TokenEndpointError("Token response is not a JSON object", provider_status=r.status_code)

    id_token = data.get("id_token") or ""
    if not id_token:
        raise TokenEndpointError("Token response has no id_token", provider_status=r.status_code)

    try:
        expires_in = int(float(data.get("expires_in") or 0))
    except (TypeError, ValueError, OverflowError) as e:
        raise TokenEndpointError(
            f"Token response has a non-numeric expires_in: {data.get('expires_in')!r}",
            provider_status=r.status_code,
        ) from e

    logger.debug("Token exchange ok: token_type=%s scope=%s", data.get("token_type"), data.get("scope"))
    return TokenBundle(
        access_token=data.get("access_token", ""),
        expires_in=expires_in,
        # Google only returns refresh_token on first consent
        refresh_token=data.get("refresh_token", ""),
        scope=data.get("scope", ""),
        token_type=data.get("token_type", ""),
        id_token=id_token,
    )


def decode_identity_claims(id_token: str) -> IdentityClaims:
    """
    Read identity claims from the id_token payload WITHOUT verifying its signature.
    Raises InvalidIdentityTokenError if the token is not a decodable JWT or its claims
    have the wrong types.
    """
    try:
        payload = jwt.decode(id_token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise InvalidIdentityTokenError(f"Could not decode id_token: {e}") from e

    aud = payload.get("aud", "")
    if isinstance(aud, list):
        aud = aud[0] if aud else ""
    email_verified = payload.get("email_verified", False)
    if isinstance(email_verified, str):
        # Some providers send the flag as a string
        email_verified = email_verified.lower() == "true"
    try:
        return IdentityClaims(
            iss=str(payload.get("iss", "")),
            aud=str(aud),
            sub=str(payload.get("sub", "")),
            email=str(payload.get("email", "")),
            email_verified=bool(email_verified),
            name=str(payload.get("name", "")),
            picture=str(payload.get("picture", "")),
            locale=str(payload.get("locale", "")),
            iat=int(payload.get("iat") or 0),
            exp=int(payload.get("exp") or 0),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidIdentityTokenError(f"id_token has malformed claims: {e}") from e
