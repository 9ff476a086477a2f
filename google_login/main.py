"""
Google Login demo app: OAuth 2.0 authorization code flow with a cookie-only session.
GET /, /login/google (callback), /dashboard, /logout. Port from PORT (default 5001).
"""
import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from google_login.config import Settings, load_settings
from google_login.errors import ProviderDeniedError, TokenExchangeError, register_error_handlers
from google_login.logging_config import configure_logging, log_requests
from google_login.oauth import build_authorization_url, decode_identity_claims, exchange_code_for_tokens
from google_login.session import IdentitySession, establish_session, read_session, terminate_session
from google_login.views import render_dashboard, render_home

logger = logging.getLogger(__name__)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one Settings instance (loaded from env when not given)."""
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)
    if not settings.has_credentials:
        logger.warning("GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET not set; login will fail at the provider")

    app = FastAPI(title="Google Login", version="0.1.0")
    app.state.settings = settings
    app.middleware("http")(log_requests)
    register_error_handlers(app)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "google_login"}

    @app.get("/", response_class=HTMLResponse)
    def home():
        """Home page with the provider login link."""
        return HTMLResponse(render_home(build_authorization_url(settings)))

    @app.get("/login/google")
    def login_google(code: str | None = None, error: str | None = None, error_description: str | None = None):
        """
        Provider callback. Exchange failures (missing code, denial, bad status, network)
        redirect to / and are logged by cause; an undecodable id_token goes to the error handler.
        """
        try:
            if error:
                raise ProviderDeniedError(error, error_description)
            tokens = exchange_code_for_tokens(settings, code)
        except TokenExchangeError as e:
            logger.log(e.log_level, "Login aborted (%s): %s", e.reason, e)
            return _redirect("/")

        claims = decode_identity_claims(tokens.id_token)
        logger.info("Login ok for sub=%s", claims.sub)
        response = _redirect("/dashboard")
        establish_session(response, IdentitySession.from_claims(claims))
        return response

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard(request: Request):
        """Profile page; requires the is_authenticated cookie."""
        session = read_session(request)
        if session is None:
            return _redirect("/")
        return HTMLResponse(render_dashboard(session))

    @app.get("/logout")
    def logout():
        """Expire all session cookies and go back to start."""
        response = _redirect("/")
        terminate_session(response)
        return response

    # Static assets at the site root; routes above take precedence
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")
    else:
        logger.warning("Static directory %s not found; not serving static files", settings.static_dir)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "google_login.main:app",
        host="127.0.0.1",
        port=app.state.settings.port,
        reload=not app.state.settings.is_prod,
    )
