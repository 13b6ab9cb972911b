"""SDK configuration for typednotion.

:class:`NotionConfig` is a dataclass that captures every tuneable knob
exposed by the SDK.  Instances are passed to both :class:`NotionClient`
and :class:`AsyncNotionClient`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from typednotion._version import __version__

DEFAULT_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_USER_AGENT = f"typednotion/{__version__}"


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class NotionConfig:
    """Complete configuration for a typednotion client.

    Every parameter has a sensible default so that the only *required*
    value is ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    user_agent:
        Value of the ``User-Agent`` header.
    timeout_seconds:
        HTTP request timeout in seconds.  Ignored when the caller injects
        its own ``httpx`` client.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~typednotion.observability.MetricsHook` backend.
    debug_dump_payload:
        Write the (redacted) request and response bodies to *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = DEFAULT_NOTION_VERSION

    base_url: str = DEFAULT_BASE_URL

    user_agent: str = DEFAULT_USER_AGENT

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        if not self.token:
            raise ValueError("token is required")

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not self.notion_version:
            raise ValueError("notion_version must not be empty")

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionConfig({', '.join(parts)})"
