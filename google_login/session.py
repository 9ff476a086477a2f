"""
Cookie-backed login session. No server-side record: the four cookies ARE the session.
Cookies are plaintext and unsigned (demo only); a session is valid iff is_authenticated is truthy.
Values are percent-encoded on write (headers are Latin-1 only) and decoded on read.
"""
from dataclasses import dataclass
from urllib.parse import quote, unquote

from starlette.requests import Request
from starlette.responses import Response

from google_login.oauth import IdentityClaims

COOKIE_AUTHENTICATED = "is_authenticated"
COOKIE_EMAIL = "email"
COOKIE_NAME = "name"
COOKIE_PICTURE = "picture"

SESSION_COOKIES = (COOKIE_AUTHENTICATED, COOKIE_EMAIL, COOKIE_NAME, COOKIE_PICTURE)

_TRUTHY = {"true", "1", "yes", "on"}

# Left readable in the cookie: plain ASCII that is common in emails, names and URLs
_COOKIE_SAFE = " @:/.-_~!*'()"


@dataclass(frozen=True)
class IdentitySession:
    email: str
    name: str
    picture: str
    authenticated: bool = True

    @classmethod
    def from_claims(cls, claims: IdentityClaims) -> "IdentitySession":
        return cls(email=claims.email, name=claims.name, picture=claims.picture)


def is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def encode_cookie_value(value: str) -> str:
    """Percent-encode as UTF-8; '%', ';', ',', '"' and all non-ASCII are always escaped."""
    return quote(value, safe=_COOKIE_SAFE)


def decode_cookie_value(value: str) -> str:
    return unquote(value)


def establish_session(response: Response, session: IdentitySession) -> None:
    """Set the session cookies. No expiry: they live until the browser drops them or logout."""
    response.set_cookie(COOKIE_AUTHENTICATED, "true" if session.authenticated else "false")
    response.set_cookie(COOKIE_EMAIL, encode_cookie_value(session.email))
    response.set_cookie(COOKIE_NAME, encode_cookie_value(session.name))
    response.set_cookie(COOKIE_PICTURE, encode_cookie_value(session.picture))


def terminate_session(response: Response) -> None:
    """Overwrite every session cookie with an empty value that expires immediately."""
    for name in SESSION_COOKIES:
        response.set_cookie(name, "", max_age=0)


def read_session(request: Request) -> IdentitySession | None:
    """Session from request cookies, or None when the authenticated flag is absent or falsy."""
    if not is_truthy(request.cookies.get(COOKIE_AUTHENTICATED)):
        return None
    cookies = request.cookies
    return IdentitySession(
        email=decode_cookie_value(cookies.get(COOKIE_EMAIL, "")),
        name=decode_cookie_value(cookies.get(COOKIE_NAME, "")),
        picture=decode_cookie_value(cookies.get(COOKIE_PICTURE, "")),
    )
