"""Turn ``"package.module:attribute"`` into an ``App``."""

import importlib

from linkbox.app import App


def resolve_app(target: str) -> App:
    """Import *target* and return the ``App`` it names.

    The attribute defaults to ``app``. A callable that is not itself an
    ``App`` is treated as a factory and called with no arguments, which
    is how ``linkbox.bookmarks:create_app`` is served.

    Import problems propagate as ``ModuleNotFoundError`` or
    ``AttributeError``; anything that does not end up as an ``App``
    raises ``TypeError``.
    """
    module_name, _, attribute = target.partition(":")
    found = getattr(importlib.import_module(module_name), attribute or "app")

    if not isinstance(found, App) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"Factory {target!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(found, App):
        return found
    msg = f"{target!r} is a {type(found).__name__}, not a linkbox.App instance"
    raise TypeError(msg)
