"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups. ``db_url=None`` builds an app without a database.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=9007, db_url="sqlite:///links.db")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 9007
    debug: bool = False
    log_level: str = "info"

    # Database
    db_url: str | None = "sqlite:///links.db"
    db_echo: bool = False

    # Page
    title: str = "links"
    recent_limit: int = 10

    # Assets
    asset_prefix: str = "/pub"
    asset_cache_control: str = "public, max-age=604800"
