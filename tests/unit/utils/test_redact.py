"""Tests for typednotion/utils/redact.py."""

from __future__ import annotations

from typednotion.utils.redact import redact

TOKEN = "secret_redact_token_wxyz"


class TestRedact:
    def test_authorization_header_redacted(self):
        result = redact({"Authorization": f"Bearer {TOKEN}"}, TOKEN)
        assert result == {"Authorization": "Bearer <redacted>"}

    def test_token_value_anywhere_is_masked(self):
        payload = {"rich_text": [{"text": {"content": f"my token is {TOKEN}"}}]}
        result = redact(payload, TOKEN)
        content = result["rich_text"][0]["text"]["content"]
        assert TOKEN not in content
        assert content == "my token is <redacted:...wxyz>"

    def test_sensitive_key_without_known_token(self):
        result = redact({"access_token": "abcdefgh12345678"})
        assert result == {"access_token": "<redacted:...5678>"}

    def test_short_sensitive_value(self):
        assert redact({"password": "hunter2"}) == {"password": "<redacted>"}

    def test_non_string_sensitive_value(self):
        assert redact({"secret": {"nested": 1}}) == {"secret": "<redacted>"}

    def test_signed_url_query_stripped(self):
        url = "https://s3.us-west-2.amazonaws.com/file.png?X-Amz-Algorithm=AWS4&X-Amz-Signature=abc"
        result = redact({"file": {"url": url}})
        assert result["file"]["url"] == "https://s3.us-west-2.amazonaws.com/file.png?<signed>"

    def test_plain_values_untouched(self):
        payload = {"object": "page", "id": "abc", "archived": False, "count": 3}
        assert redact(payload, TOKEN) == payload

    def test_input_not_mutated(self):
        payload = {"Authorization": f"Bearer {TOKEN}", "items": [TOKEN]}
        redact(payload, TOKEN)
        assert payload == {"Authorization": f"Bearer {TOKEN}", "items": [TOKEN]}
