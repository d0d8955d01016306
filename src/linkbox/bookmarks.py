"""The bookmark manager: one page, one form, one stylesheet.

``create_app()`` is the default target of ``linkbox run``::

    linkbox run linkbox.bookmarks:create_app --db sqlite:///links.db
"""

import os

from linkbox.app import App
from linkbox.assets import serve_asset
from linkbox.components import HomePage
from linkbox.config import AppConfig
from linkbox.context import Context
from linkbox.http.request import Request
from linkbox.http.response import Redirect, Response
from linkbox.links import insert_link, list_recent, new_link, validate_url
from linkbox.routing.table import RouteName, path_for

DB_ENV_VAR = "LINKBOX_DB"


async def read_submitted_url(request: Request) -> str:
    """The ``url`` field from a JSON or urlencoded body.

    Anything unreadable counts as an empty submission so it fails
    validation like any other bad URL.
    """
    if "json" in (request.content_type or ""):
        try:
            payload = await request.json()
        except (ValueError, UnicodeDecodeError):
            return ""
        url = payload.get("url") if isinstance(payload, dict) else None
        return url if isinstance(url, str) else ""
    form = await request.form()
    return form.get("url", "")


def create_app(
    config: AppConfig | None = None,
    *,
    db_url: str | None = None,
    assets: dict[str, bytes] | None = None,
) -> App:
    """Build the bookmark app.

    The database URL comes from *db_url*, then ``$LINKBOX_DB``, then
    ``config.db_url``.
    """
    config = config or AppConfig()
    app = App(config, db=db_url or os.environ.get(DB_ENV_VAR), assets=assets)
    limit = config.recent_limit

    @app.route(RouteName.HOME)
    async def home(cx: Context) -> HomePage:
        links = await list_recent(cx.db, limit)
        return HomePage(links=tuple(links))

    @app.route(RouteName.HOME, methods=["POST"], name="submit")
    async def submit(cx: Context) -> HomePage | Redirect:
        url = await read_submitted_url(cx.request)
        error = validate_url(url)
        if error is not None:
            links = await list_recent(cx.db, limit)
            return HomePage(links=tuple(links), error=error)
        await insert_link(cx.db, new_link(url))
        return Redirect(path_for(RouteName.HOME))

    @app.route(RouteName.FILE)
    def files(file: str) -> Response:
        return serve_asset(
            app.assets,
            file,
            prefix=config.asset_prefix,
            cache_control=config.asset_cache_control,
        )

    return app
