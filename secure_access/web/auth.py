"""Login gate for the whole site plus the login, logout and signup screens."""

import logging

from flask import (
    Blueprint,
    Flask,
    current_app,
    flash,
    get_flashed_messages,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from markupsafe import Markup, escape

from ..gate import LOGIN_PAGE, SIGNUP_PAGE, AccessGate, GateRequest
from ..head import login_head
from ..logout import sanitize_logout_url
from ..messages import LoginErrors, prepare_login_screen
from ..users import UserExistsError

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

# The logout view is an action of the login screen, so it shares its exemption
_PAGE_BY_ENDPOINT = {
    "auth.login": LOGIN_PAGE,
    "auth.logout": LOGIN_PAGE,
    "auth.signup": SIGNUP_PAGE,
}


def _get_config():
    return current_app.config["SA_CONFIG"]


def _get_user_store():
    return current_app.config["USER_STORE"]


def current_page() -> str:
    """Identify the screen being requested.

    Unmatched URLs have no endpoint and are identified by their path, so
    they are gated like any other page.
    """
    endpoint = request.endpoint
    if endpoint is None:
        return request.path
    return _PAGE_BY_ENDPOINT.get(endpoint, endpoint)


def is_authenticated() -> bool:
    username = session.get("user")
    return bool(username) and _get_user_store().exists(username)


def safe_redirect_target(target: str, default: str = "/") -> str:
    """Only allow relative paths as post-login/logout destinations."""
    if not target or not target.startswith("/"):
        return default
    if target.startswith("//") or target.startswith("/\\"):
        return default
    return target


def auth_redirect(destination: str):
    """Send the caller to the login screen, remembering where they were going."""
    response = redirect(url_for("auth.login", redirect_to=destination or None, reauth=1))
    response.headers["Cache-Control"] = "no-cache, must-revalidate, max-age=0"
    return response


def logout_url(redirect_to: str = "") -> Markup:
    """Build the logout link for templates, escaped for HTML."""
    url = str(escape(url_for("auth.logout", redirect_to=redirect_to or None)))
    return Markup(sanitize_logout_url(url, redirect_to))


def _request_destination() -> str:
    if request.query_string:
        return request.full_path
    return request.path


def init_gate(app: Flask, gate: AccessGate | None = None) -> AccessGate:
    """Require a logged in user for every request except the login screens.

    Register this before any other request hook so nothing runs for an
    anonymous caller ahead of the check.
    """
    gate = gate or AccessGate()
    app.config["ACCESS_GATE"] = gate

    @app.before_request
    def enforce_access():
        decision = gate.evaluate(GateRequest(
            page=current_page(),
            authenticated=is_authenticated(),
            destination=_request_destination(),
        ))
        if not decision.allowed:
            return auth_redirect(decision.redirect_to or "")
        return None

    app.jinja_env.globals["logout_url"] = logout_url
    return gate


def _render_login(errors: LoginErrors, redirect_to: str, username: str = ""):
    config = _get_config()
    # Plugins and views may flash a single message instead of queueing errors
    error = next(iter(get_flashed_messages()), "")
    message, errors = prepare_login_screen(config.login.message, errors, error)
    return render_template(
        "login.html",
        site=config.site,
        message=message,
        errors=errors,
        error=error,
        redirect_to=redirect_to,
        username=username,
        registration_enabled=config.registration.enabled,
        login_head=login_head(),
    )


@bp.route("/login", methods=["GET", "POST"])
def login():
    redirect_to = request.values.get("redirect_to", "")
    errors = LoginErrors()
    username = ""

    if request.method == "POST":
        username = request.form.get("log", "").strip()
        password = request.form.get("pwd", "")
        if _get_user_store().verify(username, password):
            session.clear()
            session["user"] = username
            logger.info(f"User '{username}' logged in")
            return redirect(safe_redirect_target(redirect_to))
        logger.warning(f"Failed login attempt for '{username}' from {request.remote_addr}")
        errors.add("incorrect_password", "The username or password you entered is incorrect.")

    if request.args.get("loggedout") == "true":
        errors.add("loggedout", "You are now logged out.", "message")

    return _render_login(errors, redirect_to, username)


@bp.route("/logout")
def logout():
    username = session.get("user")
    session.clear()
    if username:
        logger.info(f"User '{username}' logged out")

    redirect_to = request.args.get("redirect_to", "")
    if redirect_to:
        return redirect(safe_redirect_target(redirect_to))
    return redirect(url_for("auth.login", loggedout="true"))


@bp.route("/signup", methods=["GET", "POST"])
def signup():
    config = _get_config()
    errors = LoginErrors()
    username = ""

    if not config.registration.enabled:
        errors.add("registration_closed", "User registration is currently not allowed.")
    elif request.method == "POST":
        username = request.form.get("user_login", "").strip()
        password = request.form.get("user_pass", "")
        try:
            _get_user_store().add_user(username, password)
        except UserExistsError:
            errors.add("username_exists", "This username is already registered.")
        except ValueError as e:
            errors.add("empty_fields", str(e))
        else:
            flash("Registration complete. Please log in.")
            return redirect(url_for("auth.login"))

    return render_template(
        "signup.html",
        site=config.site,
        errors=errors,
        username=username,
        registration_enabled=config.registration.enabled,
        login_head=login_head(),
    )
