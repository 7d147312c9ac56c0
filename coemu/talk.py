"""Chat, connection, transfer, clock, walk, weather and map-info packets."""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum, IntFlag

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF

SYSTEM = "SYSTEM"
ALL_USERS = "ALLUSERS"
ANSWER_OK = "ANSWER_OK"
NEW_ROLE = "NEW_ROLE"

DEFAULT_COLOR = 0x00FF_FFFF


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range: {value}")


class TalkChannel(IntEnum):
    """The channel a chat message is printed to."""

    TALK = 2000
    WHISPER = 2001
    ACTION = 2002
    TEAM = 2003
    GUILD = 2004
    SPOUSE = 2006
    SYSTEM = 2007
    YELL = 2008
    FRIEND = 2009
    CENTER = 2011
    TOP_LEFT = 2012
    GHOST = 2013
    SERVICE = 2014
    TIP = 2015
    WORLD = 2021
    REGISTER = 2100
    LOGIN = 2101
    SHOP = 2102
    VENDOR = 2104
    WEBSITE = 2105
    RIGHT1 = 2108
    RIGHT2 = 2109
    OFFLINE = 2110
    ANNOUNCE = 2111
    TRADE_BOARD = 2201
    FRIEND_BOARD = 2202
    TEAM_BOARD = 2203
    GUILD_BOARD = 2204
    OTHERS_BOARD = 2205
    BROADCAST = 2500
    MONSTER = 2600
    UNKNOWN = 2601

    @classmethod
    def from_value(cls, value: int) -> TalkChannel:
        """The channel for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class TalkStyle(IntEnum):
    """How text is stylised in the client's chat area."""

    NORMAL = 0
    SCROLL = 1
    FLASH = 2
    BLAST = 3
    UNKNOWN = 4

    @classmethod
    def from_value(cls, value: int) -> TalkStyle:
        """The style for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class MsgTalk:
    """A chat message between players, or from the system to a player."""

    PACKET_ID = 1004

    color: int = 0
    channel: int = 0
    style: int = 0
    character_id: int = 0
    recipient_mesh: int = 0
    sender_mesh: int = 0
    list_count: int = 0
    sender_name: str = ""
    recipient_name: str = ""
    suffix: str = ""
    message: str = ""

    def __post_init__(self) -> None:
        self.channel = int(self.channel)
        self.style = int(self.style)
        for name in ("color", "character_id", "recipient_mesh", "sender_mesh"):
            _check_range(name, getattr(self, name), _U32)
        _check_range("channel", self.channel, _U16)
        _check_range("style", self.style, _U16)
        _check_range("list_count", self.list_count, _U8)

    @classmethod
    def from_system(
        cls, character_id: int, channel: TalkChannel, message: str
    ) -> MsgTalk:
        """A message sent by the system to all users on ``channel``."""
        return cls(
            color=DEFAULT_COLOR,
            channel=int(channel),
            style=int(TalkStyle.NORMAL),
            character_id=character_id,
            recipient_mesh=0,
            sender_mesh=0,
            list_count=4,
            sender_name=SYSTEM,
            recipient_name=ALL_USERS,
            suffix="",
            message=str(message),
        )

    @classmethod
    def login_invalid(cls) -> MsgTalk:
        return cls.from_system(0, TalkChannel.LOGIN, "Login Invalid")

    @classmethod
    def register_invalid(cls) -> MsgTalk:
        return cls.from_system(0, TalkChannel.REGISTER, "Register Invalid")

    @classmethod
    def register_ok(cls) -> MsgTalk:
        return cls.from_system(0, TalkChannel.REGISTER, ANSWER_OK)

    @classmethod
    def register_name_taken(cls) -> MsgTalk:
        return cls.from_system(
            0, TalkChannel.REGISTER, "Character name taken, try another one."
        )

    @classmethod
    def login_ok(cls) -> MsgTalk:
        return cls.from_system(0, TalkChannel.LOGIN, ANSWER_OK)

    @classmethod
    def login_new_role(cls) -> MsgTalk:
        return cls.from_system(0, TalkChannel.LOGIN, NEW_ROLE)

    def channel_kind(self) -> TalkChannel:
        """The channel, ``UNKNOWN`` for values without a name."""
        return TalkChannel.from_value(self.channel)

    def style_kind(self) -> TalkStyle:
        """The style, ``UNKNOWN`` for values without a name."""
        return TalkStyle.from_value(self.style)

    def is_command(self) -> bool:
        """Whether the message is an in-game command (starts with ``$``)."""
        return self.message.startswith("$")

    def command_args(self) -> list[str]:
        """The whitespace-separated words of a command, without the ``$``."""
        if not self.is_command():
            raise ValueError(f"not a command message: {self.message!r}")
        return self.message[1:].split()


@dataclass
class MsgConnect:
    """A connection request carrying the login token and client versions."""

    PACKET_ID = 1052

    token: int = 0
    build_version: int = 0
    language: str = ""
    file_contents: int = 0

    def __post_init__(self) -> None:
        _check_range("token", self.token, _U64)
        _check_range("build_version", self.build_version, _U16)
        _check_range("file_contents", self.file_contents, _U32)

    @property
    def creation_token(self) -> int:
        """The token as stored for character creation (low 32 bits)."""
        return self.token & _U32


@dataclass
class MsgTransfer:
    """Account parameters handed from the account server to the game server."""

    PACKET_ID = 4001

    account_id: int = 0
    realm_id: int = 0
    token: int = 0

    def __post_init__(self) -> None:
        _check_range("account_id", self.account_id, _U32)
        _check_range("realm_id", self.realm_id, _U32)
        _check_range("token", self.token, _U64)

    def with_token(self, token: int) -> MsgTransfer:
        """A copy of this transfer carrying ``token``."""
        return dataclasses.replace(self, token=token)


class DataAction(IntEnum):
    """Data actions the client understands."""

    SET_SERVER_TIME = 0
    SET_MOUNT_MOVE_POINT = 2
    ANTI_CHEAT_ANSWER_MSG_TYPE_COUNT = 3
    ANTI_CHEAT_ASK_MSG_TYPE_COUNT = 4

    @classmethod
    def from_value(cls, value: int) -> DataAction:
        """The action for ``value``, or ``SET_SERVER_TIME`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.SET_SERVER_TIME


@dataclass
class MsgData:
    """The server's date and time, used to synchronise the client's clock."""

    PACKET_ID = 1033

    action: int = 0
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def now(cls, when: datetime | None = None) -> MsgData:
        """A server-time packet for ``when`` (default: the current UTC time)."""
        if when is None:
            when = datetime.now(timezone.utc)
        elif when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        return cls(
            action=int(DataAction.SET_SERVER_TIME),
            year=when.year - 1900,
            month=when.month - 1,
            day=when.day,
            hour=when.hour,
            minute=when.minute,
            second=when.second,
        )


class MovementType(IntEnum):
    """Kinds of ground movement."""

    WALK = 0
    RUN = 1
    SHIFT = 2
    UNKNOWN = 3

    @classmethod
    def from_value(cls, value: int) -> MovementType:
        """The movement for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class MsgWalk:
    """A character's step on the map in one of eight directions."""

    PACKET_ID = 1005

    character_id: int = 0
    direction: int = 0
    movement_type: int = 0

    def __post_init__(self) -> None:
        self.movement_type = int(self.movement_type)
        _check_range("character_id", self.character_id, _U32)
        _check_range("direction", self.direction, _U8)
        _check_range("movement_type", self.movement_type, _U8)

    def facing(self) -> int:
        """The direction reduced to one of the eight compass sectors."""
        return self.direction % 8

    def kind(self) -> MovementType:
        """The movement type, ``UNKNOWN`` for values without a name."""
        return MovementType.from_value(self.movement_type)


class WeatherKind(IntEnum):
    """Weather types known to the client."""

    UNKNOWN = 0
    NONE = 1
    RAIN = 2
    SNOW = 3
    RAIN_WIND = 4
    AUTUMN_LEAVES = 5
    CHERRY_BLOSSOM_PETALS = 7
    CHERRY_BLOSSOM_PETALS_WIND = 8
    BLOWING_COTTEN = 9
    ATOMS = 10

    @classmethod
    def from_value(cls, value: int) -> WeatherKind:
        """The weather for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    def is_none(self) -> bool:
        return self is WeatherKind.NONE

    def is_unknown(self) -> bool:
        return self is WeatherKind.UNKNOWN


@dataclass
class MsgWeather:
    """Weather invoked on a map."""

    PACKET_ID = 1016

    kind: int = 0
    intensity: int = 0
    direction: int = 0
    color: int = DEFAULT_COLOR

    @classmethod
    def new(cls, kind: WeatherKind, rng: random.Random | None = None) -> MsgWeather:
        """Weather of ``kind`` with a random intensity (1-999) and direction (1-359)."""
        rng = rng if rng is not None else random.Random()
        return cls(
            kind=int(kind),
            intensity=rng.randint(1, 999),
            direction=rng.randint(1, 359),
            color=DEFAULT_COLOR,
        )

    @classmethod
    def none(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.NONE, rng)

    @classmethod
    def rain(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.RAIN, rng)

    @classmethod
    def snow(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.SNOW, rng)

    @classmethod
    def rain_wind(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.RAIN_WIND, rng)

    @classmethod
    def autumn_leaves(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.AUTUMN_LEAVES, rng)

    @classmethod
    def cherry_blossom_petals(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.CHERRY_BLOSSOM_PETALS, rng)

    @classmethod
    def cherry_blossom_petals_wind(
        cls, rng: random.Random | None = None
    ) -> MsgWeather:
        return cls.new(WeatherKind.CHERRY_BLOSSOM_PETALS_WIND, rng)

    @classmethod
    def blowing_cotten(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.BLOWING_COTTEN, rng)

    @classmethod
    def atoms(cls, rng: random.Random | None = None) -> MsgWeather:
        return cls.new(WeatherKind.ATOMS, rng)


class MapFlags(IntFlag):
    """Rules that apply on a map."""

    NONE = 0
    PK_FIELD = 1 << 0
    CHANGE_MAP_DISABLED = 1 << 1
    RECORD_DISABLED = 1 << 2
    PK_DISABLED = 1 << 3
    BOOTH_ENABLED = 1 << 4
    TEAM_DISABLED = 1 << 5
    TELEPORT_DISABLED = 1 << 6
    SYNDICATE_MAP = 1 << 7
    PRISON_MAP = 1 << 8
    FLY_DISABLED = 1 << 9
    FAMILY_MAP = 1 << 10
    MINE_FIELD = 1 << 11
    FFA_MAP = 1 << 12
    BLESSED_REBORN_MAP = 1 << 13
    NEWBIE_PROTECTION = 1 << 14

    @classmethod
    def from_bits(cls, bits: int) -> MapFlags:
        """The flags for ``bits``; no flags if any unknown bit is set."""
        known = 0
        for flag in cls:
            known |= flag.value
        if bits & ~known:
            return cls.NONE
        return cls(bits)


@dataclass
class MsgMapInfo:
    """Map rules and identity; a copy has a unique id other than its map id."""

    PACKET_ID = 1110

    uid: int = 0
    map_id: int = 0
    flags: MapFlags = field(default=MapFlags.NONE)

    def __post_init__(self) -> None:
        self.flags = MapFlags(self.flags)

    def is_static(self) -> bool:
        return self.uid == self.map_id

    def is_copy(self) -> bool:
        return self.uid != self.map_id