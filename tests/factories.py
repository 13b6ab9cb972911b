"""JSON builders shaped like real Notion API responses, and a recording
``httpx.MockTransport`` handler."""

from __future__ import annotations

import json
from typing import Any

import httpx

TOKEN = "secret_test_token_1234"


class RecordingHandler:
    """``httpx.MockTransport`` handler that records requests and answers
    from a queue of ``(status, body)`` pairs."""

    def __init__(self, responses: list[tuple[int, Any]] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses or [])

    def queue(self, status: int, body: Any) -> None:
        self._responses.append((status, body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self._responses.pop(0) if self._responses else (200, {})
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def rich_text_json(content: str = "Hello", **annotations: Any) -> dict[str, Any]:
    return {
        "type": "text",
        "text": {"content": content, "link": None},
        "annotations": {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
            **annotations,
        },
        "plain_text": content,
        "href": None,
    }


def page_json(
    parent: dict[str, Any] | None = None,
    properties: dict[str, Any] | None = None,
    page_id: str = "page-1",
) -> dict[str, Any]:
    if parent is None:
        parent = {"type": "page_id", "page_id": "parent-1"}
    if properties is None:
        properties = {
            "title": {"id": "title", "type": "title", "title": [rich_text_json("My page")]},
        }
    return {
        "object": "page",
        "id": page_id,
        "created_time": "2021-05-24T05:06:34.827Z",
        "last_edited_time": "2021-05-24T05:06:34.827Z",
        "created_by": {"object": "user", "id": "user-1"},
        "last_edited_by": {"object": "user", "id": "user-1"},
        "parent": parent,
        "archived": False,
        "url": f"https://www.notion.so/{page_id}",
        "icon": None,
        "cover": None,
        "properties": properties,
    }


def database_json(database_id: str = "db-1") -> dict[str, Any]:
    return {
        "object": "database",
        "id": database_id,
        "created_time": "2021-05-22T18:44:00.000Z",
        "last_edited_time": "2021-05-22T19:37:00.000Z",
        "title": [rich_text_json("Tasks")],
        "description": [],
        "parent": {"type": "page_id", "page_id": "parent-1"},
        "url": f"https://www.notion.so/{database_id}",
        "is_inline": False,
        "archived": False,
        "icon": {"type": "emoji", "emoji": "✅"},
        "cover": None,
        "properties": {
            "Name": {"id": "title", "name": "Name", "type": "title", "title": {}},
            "Done": {"id": "a%3Ab", "name": "Done", "type": "checkbox", "checkbox": {}},
            "Estimate": {
                "id": "c%3Ad",
                "name": "Estimate",
                "type": "number",
                "number": {"format": "number"},
            },
        },
    }


def block_json(block_type: str, payload: dict[str, Any], block_id: str = "block-1") -> dict[str, Any]:
    return {
        "object": "block",
        "id": block_id,
        "created_time": "2021-05-13T16:48:00.000Z",
        "last_edited_time": "2021-05-13T16:48:00.000Z",
        "has_children": False,
        "archived": False,
        "type": block_type,
        block_type: payload,
    }


def user_json(user_id: str = "user-1") -> dict[str, Any]:
    return {
        "object": "user",
        "id": user_id,
        "type": "person",
        "name": "Jane Doe",
        "avatar_url": "https://example.com/avatar.png",
        "person": {"email": "jane@example.com"},
    }


def list_json(results: list[Any], next_cursor: str | None = None) -> dict[str, Any]:
    return {
        "object": "list",
        "results": results,
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    }


