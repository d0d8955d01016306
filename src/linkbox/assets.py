"""Static asset serving from a sealed, read-only bundle.

The bundle is read into memory once (at app construction) and never
reloaded; requests only look paths up in it. Lookup is by exact key,
so ``..`` segments cannot reach outside the bundle directory.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from linkbox.errors import NotFound
from linkbox.http.response import Response

logger = logging.getLogger("linkbox.assets")

PACKAGE_ASSETS = Path(__file__).resolve().parent / "pub"
DEFAULT_CACHE_CONTROL = "public, max-age=604800"


class AssetBundle(Mapping[str, bytes]):
    """Immutable mapping of POSIX relative path -> file bytes.

    Usage::

        bundle = AssetBundle.from_directory("./pub")
        bundle["style.css"]  # b"body { ... }"
    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, bytes]) -> None:
        self._files: MappingProxyType[str, bytes] = MappingProxyType(dict(files))

    @classmethod
    def from_directory(cls, directory: str | Path) -> AssetBundle:
        """Read every regular file below *directory* into a bundle."""
        root = Path(directory).resolve()
        if not root.is_dir():
            msg = f"Asset directory does not exist: {root}"
            raise NotADirectoryError(msg)
        files = {
            path.relative_to(root).as_posix(): path.read_bytes()
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }
        logger.debug("loaded %d assets from %s", len(files), root)
        return cls(files)

    @classmethod
    def from_package(cls) -> AssetBundle:
        """The stylesheet and script shipped with linkbox."""
        return cls.from_directory(PACKAGE_ASSETS)

    def __getitem__(self, key: str) -> bytes:
        return self._files[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"AssetBundle({len(self)} files)"


def guess_content_type(path: str) -> str:
    """Content type from the file extension; octet-stream when unknown."""
    content_type, _ = mimetypes.guess_type(path)
    return content_type or "application/octet-stream"


def serve_asset(
    bundle: Mapping[str, bytes],
    path: str,
    *,
    prefix: str = "/pub",
    cache_control: str = DEFAULT_CACHE_CONTROL,
) -> Response:
    """Build the response for an asset request.

    *path* may be the full request path (``/pub/style.css``) or the part
    captured after the prefix (``style.css``). Raises ``NotFound`` when
    the bundle has no such file.
    """
    relative = path.lstrip("/")
    stripped_prefix = prefix.strip("/")
    if stripped_prefix and relative.startswith(stripped_prefix + "/"):
        relative = relative[len(stripped_prefix) + 1 :]

    body = bundle.get(relative)
    if body is None:
        raise NotFound(f"no asset {relative!r}")

    return (
        Response(body=body, content_type=guess_content_type(relative))
        .with_header("Cache-Control", cache_control)
    )
