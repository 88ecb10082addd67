"""Flask routes for the site content behind the gate."""

import logging
from datetime import datetime, timezone
from email.utils import format_datetime

from flask import Blueprint, Response, abort, current_app, render_template, session

logger = logging.getLogger(__name__)

bp = Blueprint("site", __name__)


def _get_config():
    return current_app.config["SA_CONFIG"]


def _find_page(slug: str):
    for page in _get_config().site.pages:
        if page.slug == slug:
            return page
    return None


@bp.route("/")
def index():
    """List every page of the site."""
    config = _get_config()
    return render_template(
        "index.html",
        site=config.site,
        pages=config.site.pages,
        user=session.get("user"),
    )


@bp.route("/feed")
def feed():
    """RSS 2.0 feed of the site pages."""
    config = _get_config()
    body = render_template(
        "feed.xml",
        site=config.site,
        pages=config.site.pages,
        build_date=format_datetime(datetime.now(timezone.utc)),
    )
    return Response(body, mimetype="application/rss+xml")


@bp.route("/<slug>")
def page(slug):
    found = _find_page(slug)
    if found is None:
        logger.debug(f"No page with slug '{slug}'")
        abort(404)
    return render_template(
        "page.html",
        site=_get_config().site,
        page=found,
        user=session.get("user"),
    )
