"""ObjectId-compatible identifiers for clubs, members, requests and events."""

import re
import secrets
import time

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    """Generate a 24-char hex id: 4-byte seconds timestamp + 8 random bytes."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str | None) -> bool:
    """Check that a value is a 24-character hex identifier."""
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None  # type: ignore[arg-type]
