"""Writes a finished Response to the ASGI ``send`` channel."""

from linkbox._internal.asgi import Send
from linkbox.http.response import Response

# 1xx, 204 and 304 responses never carry a body.
_BODYLESS = frozenset({204, 304})


def encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    """Lower-cased latin-1 header pairs, content type first."""
    pairs = [("content-type", response.content_type)]
    pairs.extend((name.lower(), value) for name, value in response.headers)
    pairs.append(("content-length", str(content_length)))
    return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as one ``http.response.start`` and one body message."""
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
