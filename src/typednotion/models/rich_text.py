"""Rich text and mention objects.

A rich text run is a tagged union of ``text``, ``mention`` and ``equation``
with shared ``plain_text``, ``href`` and :class:`Annotations`.  Mentions
nest one level deeper with their own discriminant.

Outbound runs are usually built with :meth:`RichText.plain` or by passing
just one payload; the ``type`` tag is then inferred from the populated
payload.  A tag supplied explicitly (as every decoded value has) must match
the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._codec import (
    check_one_of,
    coerce_enum,
    decode_enum,
    decode_list,
    drop_none,
    expect_dict,
    optional,
    require,
)
from .common import Annotations, Date, User


class RichTextType(str, Enum):
    TEXT = "text"
    MENTION = "mention"
    EQUATION = "equation"


class MentionType(str, Enum):
    USER = "user"
    PAGE = "page"
    DATABASE = "database"
    DATE = "date"
    LINK_PREVIEW = "link_preview"
    TEMPLATE_MENTION = "template_mention"


class TemplateMentionType(str, Enum):
    DATE = "template_mention_date"
    USER = "template_mention_user"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Link:
    url: str


@dataclass(frozen=True)
class Text:
    content: str
    link: Link | None = None


@dataclass(frozen=True)
class Equation:
    expression: str


@dataclass(frozen=True)
class ObjectReference:
    """An ``{"id": ...}`` reference to a page or database."""

    id: str


@dataclass(frozen=True)
class LinkPreview:
    url: str


@dataclass(frozen=True)
class TemplateMention:
    """Placeholder resolved when a template is duplicated.

    ``value`` is ``"today"`` / ``"now"`` for date templates and ``"me"``
    for user templates.
    """

    type: TemplateMentionType
    value: str

    def __post_init__(self) -> None:
        coerce_enum(self, "type", TemplateMentionType, "template mention type")

    @classmethod
    def from_json(cls, data: Any) -> TemplateMention:
        data = expect_dict(data, "template mention")
        mention_type = decode_enum(
            TemplateMentionType,
            require(data, "type", "template mention"),
            "template mention type",
        )
        return cls(mention_type, require(data, mention_type.value, "template mention"))

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type.value, self.type.value: self.value}


# ---------------------------------------------------------------------------
# Mention
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Mention:
    """A mention of a user, page, database, date, link preview or
    template placeholder.  Exactly one payload is set."""

    type: MentionType | None = None
    user: User | None = None
    page: ObjectReference | None = None
    database: ObjectReference | None = None
    date: Date | None = None
    link_preview: LinkPreview | None = None
    template_mention: TemplateMention | None = None

    def __post_init__(self) -> None:
        payloads = self._payloads()
        if self.type is None:
            populated = [name for name, value in payloads.items() if value is not None]
            if len(populated) == 1:
                object.__setattr__(self, "type", MentionType(populated[0]))
        tag = "" if self.type is None else coerce_enum(self, "type", MentionType, "mention type").value
        check_one_of(tag, payloads, "mention")

    def _payloads(self) -> dict[str, Any]:
        return {
            "user": self.user,
            "page": self.page,
            "database": self.database,
            "date": self.date,
            "link_preview": self.link_preview,
            "template_mention": self.template_mention,
        }

    @property
    def value(self) -> Any:
        """The populated payload."""
        return self._payloads()[self.type.value]

    @classmethod
    def from_json(cls, data: Any) -> Mention:
        data = expect_dict(data, "mention")
        mention_type = decode_enum(MentionType, require(data, "type", "mention"), "mention type")
        payload = require(data, mention_type.value, "mention")
        decoder = _MENTION_DECODERS[mention_type]
        return cls(type=mention_type, **{mention_type.value: decoder(payload)})

    def to_json(self) -> dict[str, Any]:
        key = self.type.value
        payload = self.value
        if isinstance(payload, ObjectReference):
            encoded: Any = {"id": payload.id}
        elif isinstance(payload, LinkPreview):
            encoded = {"url": payload.url}
        else:
            encoded = payload.to_json()
        return {"type": key, key: encoded}


def _decode_reference(data: Any) -> ObjectReference:
    return ObjectReference(require(expect_dict(data, "mention"), "id", "mention"))


_MENTION_DECODERS = {
    MentionType.USER: User.from_json,
    MentionType.PAGE: _decode_reference,
    MentionType.DATABASE: _decode_reference,
    MentionType.DATE: Date.from_json,
    MentionType.LINK_PREVIEW: lambda data: LinkPreview(
        require(expect_dict(data, "link preview"), "url", "link preview"),
    ),
    MentionType.TEMPLATE_MENTION: TemplateMention.from_json,
}


# ---------------------------------------------------------------------------
# RichText
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RichText:
    """A single rich text run.

    Attributes
    ----------
    type:
        ``text``, ``mention`` or ``equation``.  Inferred from the populated
        payload when omitted.
    plain_text:
        Unformatted text as computed by Notion.  Read-only on the API
        side; :meth:`plain` fills it in for convenience.
    href:
        URL of any link or mention in the run.
    annotations:
        Style flags, ``None`` when not supplied by the caller.
    """

    type: RichTextType | None = None
    text: Text | None = None
    mention: Mention | None = None
    equation: Equation | None = None
    plain_text: str = ""
    href: str | None = None
    annotations: Annotations | None = None

    def __post_init__(self) -> None:
        payloads = {"text": self.text, "mention": self.mention, "equation": self.equation}
        if self.type is None:
            populated = [name for name, value in payloads.items() if value is not None]
            if len(populated) == 1:
                object.__setattr__(self, "type", RichTextType(populated[0]))
        tag = "" if self.type is None else coerce_enum(self, "type", RichTextType, "rich text type").value
        check_one_of(tag, payloads, "rich text")

    @classmethod
    def plain(
        cls,
        content: str,
        link: str | None = None,
        annotations: Annotations | None = None,
    ) -> RichText:
        """Build a text run, optionally linked and styled."""
        return cls(
            text=Text(content, None if link is None else Link(link)),
            plain_text=content,
            href=link,
            annotations=annotations,
        )

    @classmethod
    def math(cls, expression: str) -> RichText:
        """Build an inline equation run."""
        return cls(equation=Equation(expression), plain_text=expression)

    @classmethod
    def from_json(cls, data: Any) -> RichText:
        data = expect_dict(data, "rich text")
        rt_type = decode_enum(RichTextType, require(data, "type", "rich text"), "rich text type")
        payload = expect_dict(require(data, rt_type.value, "rich text"), rt_type.value)

        text = mention = equation = None
        if rt_type is RichTextType.TEXT:
            link = optional(payload.get("link"), lambda raw: Link(require(raw, "url", "link")))
            text = Text(require(payload, "content", "text"), link)
        elif rt_type is RichTextType.MENTION:
            mention = Mention.from_json(payload)
        else:
            equation = Equation(require(payload, "expression", "equation"))

        return cls(
            type=rt_type,
            text=text,
            mention=mention,
            equation=equation,
            plain_text=data.get("plain_text") or "",
            href=data.get("href"),
            annotations=Annotations.from_json(data.get("annotations") or {}),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value}
        if self.text is not None:
            data["text"] = {
                "content": self.text.content,
                "link": None if self.text.link is None else {"url": self.text.link.url},
            }
        elif self.mention is not None:
            data["mention"] = self.mention.to_json()
        elif self.equation is not None:
            data["equation"] = {"expression": self.equation.expression}
        if self.annotations is not None:
            data["annotations"] = self.annotations.to_json()
        return drop_none({**data, "plain_text": self.plain_text or None, "href": self.href})


def decode_rich_text(data: Any) -> list[RichText]:
    """Decode a rich text array (``null`` decodes to an empty list)."""
    return decode_list(data, RichText.from_json, "rich text array")


def encode_rich_text(runs: list[RichText]) -> list[dict[str, Any]]:
    return [run.to_json() for run in runs]


def to_plain_text(runs: list[RichText]) -> str:
    """Concatenate the plain text of *runs*."""
    return "".join(
        run.plain_text or (run.text.content if run.text is not None else "")
        for run in runs
    )
