"""Markup added to the head of the login screen."""

from markupsafe import Markup

# Hides the site title heading and the "back to site" link
LOGIN_HEAD_STYLE = '<style type="text/css">#login>h1:first-child,#backtoblog{display:none}</style>'


def login_head() -> Markup:
    return Markup(LOGIN_HEAD_STYLE)
