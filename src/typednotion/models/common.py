"""Small value objects shared across the object model.

Each tagged union here (``Parent``, ``User``, ``File``, ``Icon``) keeps a
``type`` discriminant plus one optional payload field per variant.  The
``__post_init__`` check guarantees that exactly the payload named by
``type`` is populated, so a value can never say one thing and carry
another.  Use the ``classmethod`` constructors instead of filling fields
by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from typednotion.dates import DateTime
from typednotion.errors import NotionInvalidParamsError

from ._codec import (
    check_one_of,
    coerce_enum,
    decode_enum,
    drop_none,
    expect_dict,
    optional,
    require,
)

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Color(str, Enum):
    """Text, block and select option colors."""

    DEFAULT = "default"
    GRAY = "gray"
    BROWN = "brown"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    RED = "red"
    GRAY_BACKGROUND = "gray_background"
    BROWN_BACKGROUND = "brown_background"
    ORANGE_BACKGROUND = "orange_background"
    YELLOW_BACKGROUND = "yellow_background"
    GREEN_BACKGROUND = "green_background"
    BLUE_BACKGROUND = "blue_background"
    PURPLE_BACKGROUND = "purple_background"
    PINK_BACKGROUND = "pink_background"
    RED_BACKGROUND = "red_background"


class ParentType(str, Enum):
    DATABASE = "database_id"
    PAGE = "page_id"
    BLOCK = "block_id"
    WORKSPACE = "workspace"


class UserType(str, Enum):
    PERSON = "person"
    BOT = "bot"


class FileType(str, Enum):
    FILE = "file"
    EXTERNAL = "external"


class IconType(str, Enum):
    EMOJI = "emoji"
    EXTERNAL = "external"
    FILE = "file"


def decode_color(value: Any) -> Color:
    return Color.DEFAULT if value is None else decode_enum(Color, value, "color")


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Style flags applied to a rich text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: Color = Color.DEFAULT

    @classmethod
    def from_json(cls, data: Any) -> Annotations:
        data = expect_dict(data, "annotations")
        return cls(
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            strikethrough=bool(data.get("strikethrough", False)),
            underline=bool(data.get("underline", False)),
            code=bool(data.get("code", False)),
            color=decode_color(data.get("color")),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color.value,
        }


# ---------------------------------------------------------------------------
# Select options and dates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectOption:
    """A select / multi-select / status option.

    When picking an option for a page value, ``id`` or ``name`` is enough.
    """

    id: str | None = None
    name: str | None = None
    color: Color | None = None

    @classmethod
    def from_json(cls, data: Any) -> SelectOption:
        data = expect_dict(data, "select option")
        color = data.get("color")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            color=None if color is None else decode_color(color),
        )

    def to_json(self) -> dict[str, Any]:
        return drop_none({
            "id": self.id,
            "name": self.name,
            "color": None if self.color is None else self.color.value,
        })


@dataclass(frozen=True)
class Date:
    """A date (or date range) value, as found in date properties and
    date mentions."""

    start: DateTime
    end: DateTime | None = None
    time_zone: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> Date:
        data = expect_dict(data, "date")
        return cls(
            start=DateTime.parse(require(data, "start", "date")),
            end=optional(data.get("end"), DateTime.parse),
            time_zone=data.get("time_zone"),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "start": self.start.to_json(),
            "end": None if self.end is None else self.end.to_json(),
        }
        if self.time_zone is not None:
            data["time_zone"] = self.time_zone
        return data


# ---------------------------------------------------------------------------
# Parent
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Parent:
    """Reference to the parent of a page, database, block or comment."""

    type: ParentType
    page_id: str | None = None
    database_id: str | None = None
    block_id: str | None = None
    workspace: bool | None = None

    def __post_init__(self) -> None:
        check_one_of(
            coerce_enum(self, "type", ParentType, "parent type").value,
            {
                "page_id": self.page_id,
                "database_id": self.database_id,
                "block_id": self.block_id,
                "workspace": self.workspace or None,
            },
            "parent",
        )

    @classmethod
    def page(cls, page_id: str) -> Parent:
        return cls(ParentType.PAGE, page_id=page_id)

    @classmethod
    def database(cls, database_id: str) -> Parent:
        return cls(ParentType.DATABASE, database_id=database_id)

    @classmethod
    def block(cls, block_id: str) -> Parent:
        return cls(ParentType.BLOCK, block_id=block_id)

    @classmethod
    def in_workspace(cls) -> Parent:
        return cls(ParentType.WORKSPACE, workspace=True)

    @property
    def id(self) -> str | None:
        """ID of the parent object, ``None`` for the workspace."""
        return self.page_id or self.database_id or self.block_id

    @classmethod
    def from_json(cls, data: Any) -> Parent:
        data = expect_dict(data, "parent")
        parent_type = decode_enum(ParentType, require(data, "type", "parent"), "parent type")
        value = require(data, parent_type.value, "parent")
        if parent_type is ParentType.WORKSPACE:
            return cls.in_workspace()
        return cls(parent_type, **{parent_type.value: value})

    def to_json(self) -> dict[str, Any]:
        key = self.type.value
        return {"type": key, key: getattr(self, key)}


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Person:
    email: str | None = None


@dataclass(frozen=True)
class BotOwner:
    """Owner of a bot user: the workspace itself or a single user."""

    type: str
    workspace: bool = False
    user: User | None = None


@dataclass(frozen=True)
class Bot:
    owner: BotOwner | None = None
    workspace_name: str | None = None


@dataclass(frozen=True)
class User:
    """A Notion user.

    Users embedded as ``created_by`` / ``last_edited_by`` are often partial
    (``{"object": "user", "id": "..."}``); those decode with ``type=None``
    and no payload.
    """

    id: str
    type: UserType | None = None
    name: str | None = None
    avatar_url: str | None = None
    person: Person | None = None
    bot: Bot | None = None

    def __post_init__(self) -> None:
        if self.type is None:
            if self.person is not None or self.bot is not None:
                raise NotionInvalidParamsError(
                    "user payload requires a user type",
                    context={"params": "user"},
                )
            return
        check_one_of(
            coerce_enum(self, "type", UserType, "user type").value,
            {"person": self.person, "bot": self.bot},
            "user",
        )

    @classmethod
    def from_json(cls, data: Any) -> User:
        data = expect_dict(data, "user")
        raw_type = data.get("type")
        if raw_type is None:
            return cls(
                id=require(data, "id", "user"),
                name=data.get("name"),
                avatar_url=data.get("avatar_url"),
            )
        user_type = decode_enum(UserType, raw_type, "user type")
        payload = expect_dict(require(data, user_type.value, "user") or {}, user_type.value)
        person = bot = None
        if user_type is UserType.PERSON:
            person = Person(email=payload.get("email"))
        else:
            bot = _decode_bot(payload)
        return cls(
            id=require(data, "id", "user"),
            type=user_type,
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            person=person,
            bot=bot,
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"object": "user", "id": self.id}
        if self.type is None:
            return data
        data["type"] = self.type.value
        if self.name is not None:
            data["name"] = self.name
        if self.avatar_url is not None:
            data["avatar_url"] = self.avatar_url
        if self.person is not None:
            data["person"] = drop_none({"email": self.person.email})
        if self.bot is not None:
            data["bot"] = _encode_bot(self.bot)
        return data


def _decode_bot(data: dict[str, Any]) -> Bot:
    owner_data = data.get("owner")
    owner = None
    if owner_data is not None:
        owner_data = expect_dict(owner_data, "bot owner")
        owner = BotOwner(
            type=require(owner_data, "type", "bot owner"),
            workspace=bool(owner_data.get("workspace", False)),
            user=optional(owner_data.get("user"), User.from_json),
        )
    return Bot(owner=owner, workspace_name=data.get("workspace_name"))


def _encode_bot(bot: Bot) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if bot.owner is not None:
        owner: dict[str, Any] = {"type": bot.owner.type}
        if bot.owner.workspace:
            owner["workspace"] = True
        if bot.owner.user is not None:
            owner["user"] = bot.owner.user.to_json()
        data["owner"] = owner
    if bot.workspace_name is not None:
        data["workspace_name"] = bot.workspace_name
    return data


# ---------------------------------------------------------------------------
# Files, covers and icons
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FileFile:
    """A file hosted by Notion.  The signed ``url`` expires."""

    url: str
    expiry_time: DateTime | None = None


@dataclass(frozen=True)
class FileExternal:
    url: str


@dataclass(frozen=True)
class File:
    """A file object: Notion-hosted or external.  Also used for page and
    database covers."""

    type: FileType
    file: FileFile | None = None
    external: FileExternal | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        check_one_of(
            coerce_enum(self, "type", FileType, "file type").value,
            {"file": self.file, "external": self.external},
            "file",
        )

    @classmethod
    def from_url(cls, url: str, name: str | None = None) -> File:
        return cls(FileType.EXTERNAL, external=FileExternal(url), name=name)

    @classmethod
    def from_json(cls, data: Any) -> File:
        data = expect_dict(data, "file")
        file_type = decode_enum(FileType, require(data, "type", "file"), "file type")
        payload = expect_dict(require(data, file_type.value, "file"), "file")
        url = require(payload, "url", "file")
        if file_type is FileType.FILE:
            return cls(
                file_type,
                file=FileFile(url, optional(payload.get("expiry_time"), DateTime.parse)),
                name=data.get("name"),
            )
        return cls(file_type, external=FileExternal(url), name=data.get("name"))

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value}
        if self.name is not None:
            data["name"] = self.name
        if self.file is not None:
            payload: dict[str, Any] = {"url": self.file.url}
            if self.file.expiry_time is not None:
                payload["expiry_time"] = self.file.expiry_time.to_json()
            data["file"] = payload
        elif self.external is not None:
            data["external"] = {"url": self.external.url}
        return data


Cover = File


@dataclass(frozen=True)
class Icon:
    """Page or database icon: an emoji, an external image or a Notion file."""

    type: IconType
    emoji: str | None = None
    external: FileExternal | None = None
    file: FileFile | None = None

    def __post_init__(self) -> None:
        check_one_of(
            coerce_enum(self, "type", IconType, "icon type").value,
            {"emoji": self.emoji, "external": self.external, "file": self.file},
            "icon",
        )

    @classmethod
    def from_emoji(cls, emoji: str) -> Icon:
        return cls(IconType.EMOJI, emoji=emoji)

    @classmethod
    def from_url(cls, url: str) -> Icon:
        return cls(IconType.EXTERNAL, external=FileExternal(url))

    @classmethod
    def from_json(cls, data: Any) -> Icon:
        data = expect_dict(data, "icon")
        icon_type = decode_enum(IconType, require(data, "type", "icon"), "icon type")
        payload = require(data, icon_type.value, "icon")
        if icon_type is IconType.EMOJI:
            return cls.from_emoji(payload)
        payload = expect_dict(payload, "icon")
        url = require(payload, "url", "icon")
        if icon_type is IconType.EXTERNAL:
            return cls.from_url(url)
        return cls(
            icon_type,
            file=FileFile(url, optional(payload.get("expiry_time"), DateTime.parse)),
        )

    def to_json(self) -> dict[str, Any]:
        if self.emoji is not None:
            return {"type": "emoji", "emoji": self.emoji}
        if self.external is not None:
            return {"type": "external", "external": {"url": self.external.url}}
        payload: dict[str, Any] = {"url": self.file.url}
        if self.file.expiry_time is not None:
            payload["expiry_time"] = self.file.expiry_time.to_json()
        return {"type": "file", "file": payload}
