"""General action and item action packets."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum

from .lohi import construct, current_ts, hi, lo

_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range: {value}")


class ActionType(IntEnum):
    """Subtypes of the general action packet."""

    UNKNOWN = 0
    SEND_LOCATION = 74
    SEND_ITEMS = 75
    SEND_ASSOCIATES = 76
    SEND_PROFICIENCIES = 77
    SEND_SPELLS = 78
    CHANGE_FACING = 79
    CHANGE_ACTION = 81
    CHANGE_MAP = 85
    TELEPORT = 86
    LEVEL_UP = 92
    XP_CLEAR = 93
    REBORN = 94
    DEL_ROLE = 95
    SET_KILL_MODE = 96
    CONFIRM_GUILD = 97
    MINE = 99
    BOT_CHECK_A = 100
    QUERY_ENTITY = 102
    MAP_ARGB = 104
    QUERY_TEAM_MEMBER = 106
    KICK_BACK = 108
    DROP_MAGIC = 109
    DROP_SKILL = 110
    CREATE_BOOTH = 111
    SUSPEND_BOOTH = 112
    RESUME_BOOTH = 113
    LEAVE_BOOTH = 114
    POST_COMMAND = 116
    QUERY_EQUIPMENT = 117
    ABORT_TRANSFORM = 118
    TAKE_OFF = 120
    GET_MONEY = 121
    CANCEL_KEEP_BOW = 122
    QUERY_ENEMY_INFO = 123
    OPEN_DIALOG = 126
    LOGIN_COMPLETED = 130
    LEAVE_MAP = 132
    JUMP = 133
    GHOST = 137
    SYNCHRO = 138
    QUERY_FRIEND_INFO = 140
    CHANGE_FACE = 142

    @classmethod
    def from_value(cls, value: int) -> ActionType:
        """The action type for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class KillMode(IntEnum):
    """Player-killing modes a character may select."""

    FREE = 0
    SAFE = 1
    TEAM = 2
    ARRESTMENT = 3

    @classmethod
    def from_value(cls, value: int) -> KillMode:
        """The kill mode for ``value`` (read as 16 bits), or ``FREE``."""
        try:
            return cls(value & _U16)
        except ValueError:
            return cls.FREE


_KILL_MODE_NOTICES = {
    KillMode.FREE: "In free mode, you can attack everybody.",
    KillMode.SAFE: "In safe mode, you can only attack monsters.",
    KillMode.TEAM: (
        "In team mode, you can attack everybody, except your friends, "
        "your teammates, and your guildmates."
    ),
    KillMode.ARRESTMENT: (
        "In arrestment mode, you can only attack monsters and black name players."
    ),
}


def kill_mode_notice(mode: int) -> str:
    """The system notice shown after switching to ``mode``."""
    return _KILL_MODE_NOTICES[KillMode.from_value(int(mode))]


@dataclass
class MsgAction:
    """A general action performed by the client, answered by the server."""

    PACKET_ID = 1010

    client_timestamp: int = 0
    character_id: int = 0
    data1: int = 0
    data2: int = 0
    details: int = 0
    action_type: int = 0

    def __post_init__(self) -> None:
        self.action_type = int(self.action_type)
        for name in ("client_timestamp", "character_id", "data1", "data2"):
            _check_range(name, getattr(self, name), _U32)
        _check_range("details", self.details, _U16)
        _check_range("action_type", self.action_type, _U16)

    @classmethod
    def new(
        cls,
        character_id: int,
        data1: int,
        data2: int,
        details: int,
        action_type: ActionType,
    ) -> MsgAction:
        """An action stamped with the current time."""
        return cls(
            client_timestamp=current_ts(),
            character_id=character_id,
            data1=data1,
            data2=data2,
            details=details,
            action_type=int(action_type),
        )

    @classmethod
    def at(
        cls,
        character_id: int,
        x: int,
        y: int,
        direction: int,
        data1: int,
        action_type: ActionType,
    ) -> MsgAction:
        """An action carrying a position in ``data2`` and a facing in ``details``."""
        return cls.new(character_id, data1, construct(y, x), direction, action_type)

    def kind(self) -> ActionType:
        """The action type, ``UNKNOWN`` for values without a name."""
        return ActionType.from_value(self.action_type)

    def position(self) -> tuple[int, int]:
        """The ``(x, y)`` position packed in ``data2``."""
        return lo(self.data2), hi(self.data2)

    def target(self) -> tuple[int, int]:
        """The ``(x, y)`` target packed in ``data1``."""
        return lo(self.data1), hi(self.data1)

    def kill_mode(self) -> KillMode:
        """The kill mode requested in ``data1``."""
        return KillMode.from_value(self.data1)


class ItemActionType(IntEnum):
    """Subtypes of the item action packet."""

    UNKNOWN = 0
    BUY = 1
    SELL = 2
    DROP = 3
    USE = 4
    EQUIP = 5
    UNEQUIP = 6
    SPLIT_ITEM = 7
    COMBINE_ITEM = 8
    QUERY_MONEY_SAVED = 9
    SAVE_MONEY = 10
    DRAW_MONEY = 11
    DROP_MONEY = 12
    SPEND_MONEY = 13
    REPAIR = 14
    REPAIR_ALL = 15
    IDENT = 16
    DURABILITY = 17
    DROP_EQUIPEMENT = 18
    IMPROVE = 19
    UP_LEVEL = 20
    BOOTH_QUERY = 21
    BOOTH_ADD = 22
    BOOTH_DEL = 23
    BOOTH_BUY = 24
    SYNCHRO_AMOUNT = 25
    FIREWORKS = 26
    PING = 27
    ENCHANT = 28
    BOOTH_ADD_CPS = 29

    @classmethod
    def from_value(cls, value: int) -> ItemActionType:
        """The item action for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


_PING_DELAY_MS = 30


@dataclass
class MsgItem:
    """An item action command; also used to measure client ping."""

    PACKET_ID = 1009

    character_id: int = 0
    param0: int = 0
    action_type: int = 0
    client_timestamp: int = 0
    param1: int = 0

    def __post_init__(self) -> None:
        self.action_type = int(self.action_type)
        for field in dataclasses.fields(self):
            _check_range(field.name, getattr(self, field.name), _U32)

    def kind(self) -> ItemActionType:
        """The item action, ``UNKNOWN`` for values without a name."""
        return ItemActionType.from_value(self.action_type)

    def ping_reply(self) -> MsgItem:
        """The answer to a ping: the same packet with the timestamp moved 30 ms on."""
        if self.kind() is not ItemActionType.PING:
            raise ValueError(f"not a ping packet: {self.kind().name}")
        return dataclasses.replace(
            self, client_timestamp=(self.client_timestamp + _PING_DELAY_MS) & _U32
        )