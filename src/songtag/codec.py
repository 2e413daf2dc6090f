"""Transport codec for captured recognition-tool output.

The recognition tool's stdout is assumed to be transport-encoded before it
reaches us (base64 by default) because some capture channels mangle non-ASCII
bytes. Decoding on ingest is our side of that contract.
"""

from __future__ import annotations

import base64
import binascii

BASE64 = "base64"
IDENTITY = "identity"


def decode_payload(raw: bytes, codec: str = BASE64) -> str:
    """Undo the transport encoding and return the payload as UTF-8 text.

    Raises ValueError when the payload is not valid for the codec or is not
    UTF-8 once decoded.
    """
    if codec == BASE64:
        # `base64` wraps long lines unless told otherwise; ignore whitespace.
        compact = b"".join(raw.split())
        try:
            data = base64.b64decode(compact, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    elif codec == IDENTITY:
        data = raw
    else:
        raise ValueError(f"Unknown transport codec: {codec}")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Payload is not UTF-8: {e}") from e
