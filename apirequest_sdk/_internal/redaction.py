"""Redaction of credentials in request and response bodies before logging."""

import json
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "password",
    "passcode",
    "secret",
    "token",
    "access_token",
    "refresh_token",
    "id_token",
    "client_secret",
    "client_assertion",
    "authorization",
    "session_token",
    "sessiontoken",
    "state_token",
    "statetoken",
    "api_key",
    "private_key",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: Any) -> Any:
    """Recursively redact sensitive keys from a decoded JSON value.

    Creates a copy - the original payload is never mutated. Keys are matched
    case-insensitively.
    """
    if isinstance(payload, dict):
        result = {}
        for key, value in payload.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact_payload(value)
        return result
    elif isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    else:
        return payload


def redact_body(body: bytes | None) -> str:
    """Render a raw JSON body for debug output with credentials redacted.

    Bodies that are not JSON are summarised by size only.
    """
    if body is None:
        return "<no body>"
    try:
        decoded = json.loads(body)
    except ValueError:
        return f"<{len(body)} bytes, not JSON>"
    return json.dumps(redact_payload(decoded), separators=(",", ":"))
