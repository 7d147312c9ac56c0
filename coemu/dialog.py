"""NPC task dialogs and a builder that keeps their parts in order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF


class DialogActionKind(IntEnum):
    """The part of a dialog a task packet carries."""

    UNKNOWN = 0
    TEXT = 1
    LINK = 2
    EDIT = 3
    AVATAR = 4
    LIST_LINE = 5
    CREATE = 100
    ANSWER = 101
    TASK_ID = 102

    @classmethod
    def from_value(cls, value: int) -> DialogActionKind:
        """The action for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class DialogBuilderError(Exception):
    """A dialog part was added out of order."""


@dataclass
class MsgTaskDialog:
    """One part of an NPC dialog."""

    PACKET_ID = 2032

    task_id: int = 0
    avatar: int = 0
    option_id: int = _U8
    action: int = 0
    msgs: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.action = int(self.action)
        for name, limit in (
            ("task_id", _U32),
            ("avatar", _U16),
            ("option_id", _U8),
            ("action", _U8),
        ):
            value = getattr(self, name)
            if not 0 <= value <= limit:
                raise ValueError(f"{name} out of range: {value}")
        self.msgs = list(self.msgs)

    def kind(self) -> DialogActionKind:
        return DialogActionKind.from_value(self.action)

    @classmethod
    def builder(cls, max_text_len: int) -> DialogBuilder:
        """A builder for a dialog whose texts hold at most ``max_text_len`` bytes."""
        return DialogBuilder(max_text_len)


class _Stage(Enum):
    ADDING_TEXT = "text"
    ADDING_OPTION_OR_EDIT = "options"
    ADDING_AVATAR = "avatar"
    READY = "ready"
    BUILT = "built"


class DialogBuilder:
    """Builds the packets of a dialog: text, options, avatar, then build()."""

    def __init__(self, max_text_len: int) -> None:
        if max_text_len <= 0:
            raise ValueError(f"max_text_len must be positive: {max_text_len}")
        self._max = max_text_len
        self._tasks: list[MsgTaskDialog] = []
        self._stage = _Stage.ADDING_TEXT

    def _expect(self, stage: _Stage, step: str) -> None:
        if self._stage is not stage:
            raise DialogBuilderError(
                f"cannot {step} while in the {self._stage.value} stage"
            )

    def text(self, text: str) -> DialogBuilder:
        """Add the dialog text, split into chunks of at most the maximum bytes."""
        self._expect(_Stage.ADDING_TEXT, "add text")
        raw = text.encode("utf-8")
        msgs = []
        for start in range(0, len(raw), self._max):
            try:
                msgs.append(raw[start : start + self._max].decode("utf-8"))
            except UnicodeDecodeError:
                continue
        self._tasks.append(
            MsgTaskDialog(option_id=_U8, action=DialogActionKind.TEXT, msgs=msgs)
        )
        self._stage = _Stage.ADDING_OPTION_OR_EDIT
        return self

    def _option(self, option_id: int, text: str, action: DialogActionKind) -> None:
        self._expect(_Stage.ADDING_OPTION_OR_EDIT, "add an option")
        if len(text.encode("utf-8")) > self._max:
            text = text[: self._max]
        self._tasks.append(
            MsgTaskDialog(option_id=option_id, action=action, msgs=[text])
        )

    def with_option(self, option_id: int, text: str) -> DialogBuilder:
        """Add a link option."""
        self._option(option_id, text, DialogActionKind.LINK)
        return self

    def with_edit(self, option_id: int, text: str) -> DialogBuilder:
        """Add an input field."""
        self._option(option_id, text, DialogActionKind.EDIT)
        return self

    def and_(self) -> DialogBuilder:
        """Finish the options and move on to the avatar."""
        self._expect(_Stage.ADDING_OPTION_OR_EDIT, "finish the options")
        self._stage = _Stage.ADDING_AVATAR
        return self

    def with_avatar(self, avatar: int) -> DialogBuilder:
        """Add the NPC's avatar."""
        self._expect(_Stage.ADDING_AVATAR, "add an avatar")
        self._tasks.append(
            MsgTaskDialog(avatar=avatar, option_id=_U8, action=DialogActionKind.AVATAR)
        )
        self._stage = _Stage.READY
        return self

    def build(self) -> list[MsgTaskDialog]:
        """The dialog's packets, closed by the create packet."""
        self._expect(_Stage.READY, "build")
        self._tasks.append(MsgTaskDialog(option_id=_U8, action=DialogActionKind.CREATE))
        self._stage = _Stage.BUILT
        return self._tasks