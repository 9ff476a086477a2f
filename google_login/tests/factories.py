"""Test data: id_tokens and fake token endpoint responses."""
import jwt

# Any key works: the app never verifies id_token signatures
TEST_SIGNING_KEY = "test-signing-key-not-a-secret-0123456789"


def make_id_token(**claims) -> str:
    payload = {
        "iss": "https://accounts.google.com",
        "aud": "test-client.apps.googleusercontent.com",
        "sub": "1234567890",
        "email": "a@b.com",
        "email_verified": True,
        "name": "A B",
        "picture": "https://x/y.png",
        "locale": "en",
        "iat": 1700000000,
        "exp": 1700003600,
    }
    payload.update(claims)
    return jwt.encode(payload, TEST_SIGNING_KEY, algorithm="HS256")


class MockTokenResponse:
    """Stand-in for the httpx.Response returned by httpx.post."""

    def __init__(self, status_code=200, body=None, content_type="application/json"):
        self.status_code = status_code
        self._body = body
        self.headers = {"content-type": content_type} if content_type else {}

    def json(self):
        if self._body is None:
            raise ValueError("not JSON")
        return self._body


def token_body(id_token: str | None = None) -> dict:
    return {
        "access_token": "ya29.test-access",
        "expires_in": 3599,
        "refresh_token": "1//test-refresh",
        "scope": "https://www.googleapis.com/auth/userinfo.email openid",
        "token_type": "Bearer",
        "id_token": id_token if id_token is not None else make_id_token(),
    }
