"""URL-encoded parameters from a query string or a form body."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Read-only ``application/x-www-form-urlencoded`` data.

    The first value given for a name wins. Blank values are kept, so
    ``url=`` yields ``""`` rather than a missing key.
    """

    __slots__ = ("_params",)

    def __init__(self, raw: bytes = b"") -> None:
        params: dict[str, str] = {}
        for name, value in parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True):
            params.setdefault(name, value)
        self._params: MappingProxyType[str, str] = MappingProxyType(params)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"QueryParams({dict(self._params)!r})"
