"""Logout URL cleanup.

A logout link normally carries ``redirect_to`` pointing back at the page the
user was on. On a site that requires login that page immediately bounces
the user to the login screen again, hiding the "logged out" message, so the
parameter is removed.
"""

from urllib.parse import unquote_plus

ESCAPED_AMP = "&amp;"


def sanitize_logout_url(logout_url: str, redirect: str) -> str:
    """Remove the ``redirect_to`` parameter for ``redirect`` from a logout URL.

    The URL is expected to be escaped for HTML already, so ``&amp;`` is
    treated as the query separator. Empty query segments left behind are
    dropped and the query is rebuilt; a query that ends up empty loses its
    ``?``. URLs without a matching parameter are returned unchanged.
    """
    if not redirect:
        return logout_url

    base, sep, rest = logout_url.partition("?")
    if not sep:
        return logout_url
    query, hash_sep, fragment = rest.partition("#")

    escaped = ESCAPED_AMP in query or "&" not in query
    segments = query.replace(ESCAPED_AMP, "&").split("&")

    kept = []
    removed = False
    for segment in segments:
        key, _, value = segment.partition("=")
        if key == "redirect_to" and unquote_plus(value) == redirect:
            removed = True
            continue
        if segment:
            kept.append(segment)

    if not removed:
        return logout_url

    url = base
    if kept:
        url += "?" + (ESCAPED_AMP if escaped else "&").join(kept)
    if hash_sep:
        url += "#" + fragment
    return url
