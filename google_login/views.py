"""
HTML pages. Values are passed through as-is and only HTML-escaped on output.
"""
import html

from google_login.session import IdentitySession


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{html.escape(title)}</title>
  <link rel="stylesheet" href="/style.css">
</head>
<body>
{body}
</body>
</html>"""


def render_home(authorization_url: str) -> str:
    """Landing page with the provider login link."""
    return _page(
        "Login with Google",
        f"""  <h1>OAuth 2.0 Demo</h1>
  <p><a class="button" href="{html.escape(authorization_url, quote=True)}">Login with Google</a></p>""",
    )


def render_dashboard(session: IdentitySession) -> str:
    email = html.escape(session.email)
    name = html.escape(session.name)
    picture = html.escape(session.picture, quote=True)
    return _page(
        "Dashboard",
        f"""  <h1>Welcome, {name}</h1>
  <img class="avatar" src="{picture}" alt="Profile picture">
  <p>Name: <span id="name">{name}</span></p>
  <p>Email: <span id="email">{email}</span></p>
  <p><a href="/logout">Log out</a></p>""",
    )
