"""Tests for rich text runs, mentions and the shared value objects."""

from __future__ import annotations

import pytest
from factories import rich_text_json
from hypothesis import given
from hypothesis import strategies as st

from typednotion.errors import NotionDecodeError, NotionInvalidParamsError
from typednotion.models import (
    Annotations,
    Color,
    Equation,
    File,
    FileType,
    Icon,
    Mention,
    MentionType,
    ObjectReference,
    Parent,
    ParentType,
    RichText,
    RichTextType,
    Text,
    User,
    UserType,
    to_plain_text,
)
from typednotion.models.rich_text import decode_rich_text

# ---------------------------------------------------------------------------
# RichText
# ---------------------------------------------------------------------------


class TestRichTextDecode:
    def test_text_run(self):
        run = RichText.from_json(rich_text_json("Hello", bold=True, color="red"))
        assert run.type is RichTextType.TEXT
        assert run.text == Text("Hello")
        assert run.plain_text == "Hello"
        assert run.annotations.bold is True
        assert run.annotations.color is Color.RED

    def test_linked_text(self):
        data = rich_text_json("docs")
        data["text"]["link"] = {"url": "https://example.com"}
        data["href"] = "https://example.com"
        run = RichText.from_json(data)
        assert run.text.link.url == "https://example.com"
        assert run.href == "https://example.com"

    def test_equation_run(self):
        run = RichText.from_json({"type": "equation", "equation": {"expression": "e=mc^2"}, "plain_text": "e=mc^2"})
        assert run.type is RichTextType.EQUATION
        assert run.equation == Equation("e=mc^2")

    def test_equation_run_encodes(self):
        assert RichText.math("x^2").to_json() == {
            "type": "equation",
            "equation": {"expression": "x^2"},
            "plain_text": "x^2",
        }

    def test_user_mention(self):
        run = RichText.from_json({
            "type": "mention",
            "mention": {"type": "user", "user": {"object": "user", "id": "u1"}},
            "plain_text": "@Jane",
        })
        assert run.mention.type is MentionType.USER
        assert run.mention.value == User(id="u1")

    def test_page_and_date_mentions(self):
        page = Mention.from_json({"type": "page", "page": {"id": "p1"}})
        assert page.page == ObjectReference("p1")
        date = Mention.from_json({"type": "date", "date": {"start": "2021-05-23", "end": None}})
        assert str(date.date.start) == "2021-05-23"
        assert date.date.end is None

    def test_template_mention(self):
        mention = Mention.from_json({
            "type": "template_mention",
            "template_mention": {"type": "template_mention_date", "template_mention_date": "today"},
        })
        assert mention.template_mention.value == "today"
        assert mention.to_json() == {
            "type": "template_mention",
            "template_mention": {"type": "template_mention_date", "template_mention_date": "today"},
        }

    def test_unknown_type_raises(self):
        with pytest.raises(NotionDecodeError, match="unknown rich text type"):
            RichText.from_json({"type": "emoji", "emoji": {}})

    def test_missing_payload_raises(self):
        with pytest.raises(NotionDecodeError, match="missing required field"):
            RichText.from_json({"type": "text"})

    def test_unknown_color_raises(self):
        with pytest.raises(NotionDecodeError, match="unknown color"):
            RichText.from_json(rich_text_json("x", color="ultraviolet"))

    def test_null_array_is_empty(self):
        assert decode_rich_text(None) == []


class TestRichTextConstruct:
    def test_type_inferred_from_payload(self):
        assert RichText(text=Text("hi")).type is RichTextType.TEXT
        assert RichText(equation=Equation("x")).type is RichTextType.EQUATION

    def test_string_type_is_coerced(self):
        assert RichText(type="text", text=Text("hi")).type is RichTextType.TEXT

    def test_two_payloads_rejected(self):
        with pytest.raises(NotionInvalidParamsError, match="exactly one payload"):
            RichText(text=Text("a"), equation=Equation("b"))

    def test_no_payload_rejected(self):
        with pytest.raises(NotionInvalidParamsError):
            RichText()

    def test_mismatched_tag_rejected(self):
        with pytest.raises(NotionInvalidParamsError, match="does not match"):
            RichText(type=RichTextType.EQUATION, text=Text("a"))

    def test_plain_to_json(self):
        run = RichText.plain("Hi", link="https://example.com", annotations=Annotations(italic=True))
        data = run.to_json()
        assert data["type"] == "text"
        assert data["text"] == {"content": "Hi", "link": {"url": "https://example.com"}}
        assert data["annotations"]["italic"] is True
        assert data["href"] == "https://example.com"

    def test_unstyled_run_omits_annotations(self):
        assert "annotations" not in RichText.plain("Hi").to_json()

    def test_to_plain_text(self):
        runs = [RichText.plain("Hello, "), RichText(text=Text("world")), RichText.math("!")]
        assert to_plain_text(runs) == "Hello, world!"


class TestRichTextProperties:
    @given(content=st.text(max_size=200))
    def test_plain_run_survives_encoding(self, content: str):
        decoded = RichText.from_json(RichText.plain(content).to_json())
        assert decoded.type is RichTextType.TEXT
        assert decoded.text.content == content
        assert to_plain_text([decoded]) == content


# ---------------------------------------------------------------------------
# Shared value objects
# ---------------------------------------------------------------------------


class TestParent:
    @pytest.mark.parametrize(
        ("data", "parent_type", "parent_id"),
        [
            ({"type": "page_id", "page_id": "p1"}, ParentType.PAGE, "p1"),
            ({"type": "database_id", "database_id": "d1"}, ParentType.DATABASE, "d1"),
            ({"type": "block_id", "block_id": "b1"}, ParentType.BLOCK, "b1"),
            ({"type": "workspace", "workspace": True}, ParentType.WORKSPACE, None),
        ],
    )
    def test_decode(self, data, parent_type, parent_id):
        parent = Parent.from_json(data)
        assert parent.type is parent_type
        assert parent.id == parent_id
        assert parent.to_json() == data

    def test_unknown_type(self):
        with pytest.raises(NotionDecodeError, match="unknown parent type"):
            Parent.from_json({"type": "team_id", "team_id": "t1"})

    def test_payload_must_match_type(self):
        with pytest.raises(NotionInvalidParamsError):
            Parent(ParentType.PAGE, database_id="d1")


class TestUser:
    def test_person(self):
        user = User.from_json({
            "object": "user",
            "id": "u1",
            "type": "person",
            "name": "Jane",
            "person": {"email": "jane@example.com"},
        })
        assert user.type is UserType.PERSON
        assert user.person.email == "jane@example.com"

    def test_bot_with_workspace_owner(self):
        user = User.from_json({
            "object": "user",
            "id": "b1",
            "type": "bot",
            "bot": {"owner": {"type": "workspace", "workspace": True}, "workspace_name": "Acme"},
        })
        assert user.bot.owner.workspace is True
        assert user.bot.workspace_name == "Acme"
        assert user.to_json()["bot"] == {"owner": {"type": "workspace", "workspace": True}, "workspace_name": "Acme"}

    def test_partial_user(self):
        user = User.from_json({"object": "user", "id": "u1"})
        assert user.type is None
        assert user.to_json() == {"object": "user", "id": "u1"}

    def test_payload_without_type_rejected(self):
        with pytest.raises(NotionInvalidParamsError):
            User(id="u1", bot=None, person=object())


class TestFilesAndIcons:
    def test_hosted_file(self):
        data = {
            "type": "file",
            "name": "report.pdf",
            "file": {"url": "https://s3.example.com/report.pdf", "expiry_time": "2021-05-23T10:00:00.000Z"},
        }
        file = File.from_json(data)
        assert file.type is FileType.FILE
        assert file.file.expiry_time.has_time is True
        assert file.to_json() == {
            "type": "file",
            "name": "report.pdf",
            "file": {"url": "https://s3.example.com/report.pdf", "expiry_time": "2021-05-23T10:00:00Z"},
        }

    def test_external_file(self):
        file = File.from_url("https://example.com/cover.png")
        assert file.to_json() == {"type": "external", "external": {"url": "https://example.com/cover.png"}}

    def test_emoji_icon(self):
        icon = Icon.from_json({"type": "emoji", "emoji": "🚀"})
        assert icon == Icon.from_emoji("🚀")
        assert icon.to_json() == {"type": "emoji", "emoji": "🚀"}

    def test_external_icon(self):
        icon = Icon.from_json({"type": "external", "external": {"url": "https://example.com/i.png"}})
        assert icon.external.url == "https://example.com/i.png"

    def test_hosted_icon_round_trip(self):
        data = {
            "type": "file",
            "file": {"url": "https://s3.example.com/icon.png", "expiry_time": "2021-05-23T10:00:00Z"},
        }
        assert Icon.from_json(data).to_json() == data

    def test_unknown_icon_type(self):
        with pytest.raises(NotionDecodeError):
            Icon.from_json({"type": "custom_emoji", "custom_emoji": {}})
