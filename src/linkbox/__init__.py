"""linkbox: a small server-rendered bookmark manager.

Submit a URL through the form, it is validated and stored in SQLite,
and the page lists the newest links.

Basic usage::

    from linkbox import create_app

    app = create_app()
    app.run()

Or from the command line::

    linkbox migrate --db sqlite:///links.db
    linkbox run --db sqlite:///links.db
"""

import importlib

__version__ = "0.1.0"
_EXPORTS = {
    "App": "linkbox.app",
    "AppConfig": "linkbox.config",
    "create_app": "linkbox.bookmarks",
    "Request": "linkbox.http.request",
    "Response": "linkbox.http.response",
    "Redirect": "linkbox.http.response",
    "Component": "linkbox.components",
    "HomePage": "linkbox.components",
    "Context": "linkbox.context",
    "LinkboxError": "linkbox.errors",
    "ConfigurationError": "linkbox.errors",
    "HTTPError": "linkbox.errors",
    "NotFound": "linkbox.errors",
}
__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    """Import public names on first access so ``import linkbox`` stays cheap."""
    module = _EXPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module), name)
