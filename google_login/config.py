"""
Google Login configuration. Read once at startup from the environment (and .env).
Client secret comes from env only; nothing sensitive lives in this file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

# Google OAuth 2.0 endpoints
GOOGLE_AUTH_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"

DEFAULT_SCOPES = (
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)

DEFAULT_PORT = 5001

# Relative STATIC_DIR values resolve here, not against the working directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_STATIC_DIR = str(PROJECT_ROOT / "public")


def _getenv(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    client_id: str
    client_secret: str
    redirect_uri: str
    port: int = DEFAULT_PORT
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    access_type: str = "offline"
    auth_endpoint: str = GOOGLE_AUTH_ENDPOINT
    token_endpoint: str = GOOGLE_TOKEN_ENDPOINT
    # Seconds before the code exchange POST is abandoned
    token_timeout: float = 10.0
    app_env: AppEnv = "dev"
    log_level: LogLevel = "info"
    static_dir: str = DEFAULT_STATIC_DIR

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def load_settings(env_file: str | None = None) -> Settings:
    """
    Build Settings from environment variables, loading a .env file first if present.
    Existing environment variables win over .env values. Raises ValueError on bad input.
    """
    load_dotenv(env_file)

    app_env = _getenv("APP_ENV", "dev").lower()
    if app_env not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env!r})")

    log_level = _getenv("LOG_LEVEL", "info").lower()
    if log_level not in ("debug", "info", "warning", "error"):
        raise ValueError(f"LOG_LEVEL must be debug|info|warning|error (got {log_level!r})")

    port_raw = _getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    timeout_raw = _getenv("TOKEN_TIMEOUT_SECONDS", "10")
    try:
        token_timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(f"TOKEN_TIMEOUT_SECONDS must be a number (got {timeout_raw!r})") from None
    if token_timeout <= 0:
        raise ValueError(f"TOKEN_TIMEOUT_SECONDS must be positive (got {timeout_raw!r})")

    scopes_raw = _getenv("GOOGLE_SCOPES")
    scopes = tuple(scopes_raw.split()) if scopes_raw else DEFAULT_SCOPES

    return Settings(  # type: ignore[arg-type]
        client_id=_getenv("GOOGLE_CLIENT_ID"),
        client_secret=_getenv("GOOGLE_CLIENT_SECRET"),
        redirect_uri=_getenv("GOOGLE_REDIRECT_URI") or f"http://localhost:{port}/login/google",
        port=port,
        scopes=scopes,
        auth_endpoint=_getenv("GOOGLE_AUTH_ENDPOINT", GOOGLE_AUTH_ENDPOINT),
        token_endpoint=_getenv("GOOGLE_TOKEN_ENDPOINT", GOOGLE_TOKEN_ENDPOINT),
        token_timeout=token_timeout,
        app_env=app_env,
        log_level=log_level,
        static_dir=str(PROJECT_ROOT / (_getenv("STATIC_DIR") or "public")),
    )
