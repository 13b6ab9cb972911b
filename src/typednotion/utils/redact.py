"""Token redaction for safe debug dumps.

Before a request or response body is written to *stderr* the :func:`redact`
function is applied:

* Values under sensitive keys (``authorization``, ``token``, ``secret`` ...)
  are masked, keeping only the last four characters of the token.
* The full bearer **token is never present** in the output, wherever it
  appears in the tree.
* Signed file URLs (``file.url`` with an ``X-Amz-`` query string) have
  their query string stripped.
"""

from __future__ import annotations

import copy
import re
from typing import Any

# If any of these appear in a key name (case-insensitive) the value is
# redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "cookie",
    "api_key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")
_SIGNED_URL_RE = re.compile(r"(https?://[^\s?]+)\?[^\s]*X-Amz-[^\s]*")


def _mask_token(value: str, token: str | None) -> str:
    """Replace bearer / token strings with a safe placeholder."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _mask_secret(value: str) -> str:
    """Mask a value stored under a sensitive key."""
    masked = _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)
    if masked != value:
        return masked
    if len(value) < 8:
        return "<redacted>"
    return f"<redacted:...{value[-4:]}>"


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        value = _SIGNED_URL_RE.sub(lambda m: f"{m.group(1)}?<signed>", value)
        return _mask_token(value, token)
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                result[key] = _mask_secret(value)
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (a request body, response body or set of
        headers).
    token:
        The Notion integration token.  Any occurrence of this exact string
        anywhere in the payload is replaced.

    Examples
    --------
    >>> redact({"Authorization": "Bearer secret_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, token)
