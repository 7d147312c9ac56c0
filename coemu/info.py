"""Spawn, character, item and NPC information packets."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF

_AVATAR_MESH_FACTOR = 10_000


def _check_unsigned(obj: object, widths: dict[str, int]) -> None:
    for name, limit in widths.items():
        value = getattr(obj, name)
        if not 0 <= value <= limit:
            raise ValueError(f"{name} out of range: {value}")


def _body_mesh(mesh: int, avatar: int) -> int:
    return mesh + avatar * _AVATAR_MESH_FACTOR


@dataclass
class MsgPlayer:
    """Spawn information for a character entering an observer's screen."""

    PACKET_ID = 1014

    character_id: int = 0
    mesh: int = 0
    status_flags: int = 0
    syndicate_id: int = 0
    reserved0: int = 0
    syndicate_member_rank: int = 0
    germent: int = 0
    helment: int = 0
    armor: int = 0
    right_hand: int = 0
    left_hand: int = 0
    reserved1: int = 0
    health_points: int = 0
    level: int = 0
    x: int = 0
    y: int = 0
    hair_style: int = 0
    direction: int = 0
    action: int = 0
    metempsychosis: int = 0
    level2: int = 0
    reserved2: int = 0
    nobility_rank: int = 0
    character_id2: int = 0
    nobility_position: int = 0
    list_count: int = 0
    character_name: str = ""

    def __post_init__(self) -> None:
        _check_unsigned(
            self,
            {
                "reserved0": _U8,
                "syndicate_member_rank": _U8,
                "health_points": _U16,
                "x": _U16,
                "y": _U16,
                "direction": _U8,
                "action": _U8,
                "list_count": _U8,
            },
        )

    @classmethod
    def for_character(
        cls,
        *,
        character_id: int,
        name: str,
        mesh: int,
        avatar: int,
        health_points: int,
        hair_style: int,
        level: int,
        x: int,
        y: int,
        direction: int,
        action: int = 0,
        status_flags: int = 0,
    ) -> MsgPlayer:
        """The spawn packet describing a character."""
        return cls(
            character_id=character_id,
            character_id2=character_id,
            mesh=_body_mesh(mesh, avatar),
            health_points=health_points,
            hair_style=hair_style,
            level=level,
            level2=level,
            x=x,
            y=y,
            direction=direction,
            list_count=1,
            character_name=name,
            status_flags=status_flags,
            action=action,
        )


@dataclass
class MsgUserInfo:
    """Character information used to initialise the client on login."""

    PACKET_ID = 1006

    character_id: int = 1
    mesh: int = 1003 + 10000
    hair_style: int = (3 * 100) + 11
    silver: int = 100
    cps: int = 0
    experience: int = 0
    reserved0: int = 0
    reserved1: int = 0
    strength: int = 4
    agility: int = 6
    vitality: int = 12
    spirit: int = 6
    attribute_points: int = 0
    health_points: int = 318
    mana_points: int = 0
    kill_points: int = 0
    level: int = 1
    current_class: int = 10
    previous_class: int = 0
    rebirths: int = 0
    show_name: bool = True
    list_count: int = 2
    character_name: str = "Test"
    spouse: str = "None"

    def __post_init__(self) -> None:
        _check_unsigned(
            self,
            {
                "character_id": _U32,
                "mesh": _U32,
                "hair_style": _U16,
                "silver": _U32,
                "cps": _U32,
                "experience": _U64,
                "reserved0": _U64,
                "reserved1": _U64,
                "strength": _U16,
                "agility": _U16,
                "vitality": _U16,
                "spirit": _U16,
                "attribute_points": _U16,
                "health_points": _U16,
                "mana_points": _U16,
                "kill_points": _U16,
                "level": _U8,
                "current_class": _U8,
                "previous_class": _U8,
                "rebirths": _U8,
                "list_count": _U8,
            },
        )

    @classmethod
    def for_character(
        cls,
        *,
        character_id: int,
        name: str,
        mesh: int,
        avatar: int,
        hair_style: int,
        silver: int,
        cps: int,
        experience: int,
        strength: int,
        agility: int,
        vitality: int,
        spirit: int,
        attribute_points: int,
        health_points: int,
        mana_points: int,
        kill_points: int,
        level: int,
        current_class: int,
        previous_class: int,
        rebirths: int,
    ) -> MsgUserInfo:
        """The login information describing a character."""
        return cls(
            character_id=character_id,
            mesh=_body_mesh(mesh, avatar),
            hair_style=hair_style,
            silver=silver,
            cps=cps,
            experience=experience,
            reserved0=0,
            reserved1=0,
            strength=strength,
            agility=agility,
            vitality=vitality,
            spirit=spirit,
            attribute_points=attribute_points,
            health_points=health_points,
            mana_points=mana_points,
            kill_points=kill_points,
            level=level,
            current_class=current_class,
            previous_class=previous_class,
            rebirths=rebirths,
            show_name=True,
            list_count=2,
            character_name=name,
            spouse="None",
        )


class ItemInfoAction(IntEnum):
    """What an item information packet does on the client."""

    NONE = 0
    ADD_ITEM = 1
    TRADE = 2
    UPDATE = 3
    OTHER_PLAYER_EQUIPEMENT = 4

    @classmethod
    def from_value(cls, value: int) -> ItemInfoAction:
        """The action for ``value``, or ``NONE`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


@dataclass
class MsgItemInfo:
    """Adds or updates the attributes of a specific item on the client."""

    PACKET_ID = 1008

    character_id: int = 0
    item_id: int = 0
    durability: int = 0
    max_durability: int = 0
    action: int = 0
    ident: int = 0
    position: int = 0
    reserved0: int = 0
    reserved1: int = 0
    gem_one: int = 0
    gem_two: int = 0
    reborn_effect: int = 0
    magic: int = 0
    plus: int = 0
    blees: int = 0
    enchant: int = 0
    reserved2: int = 0
    restrain: int = 0
    reserved3: int = 0
    reserved4: int = 0

    def __post_init__(self) -> None:
        self.action = int(self.action)
        _check_unsigned(
            self,
            {
                "character_id": _U32,
                "item_id": _U32,
                "durability": _U16,
                "max_durability": _U16,
                "action": _U8,
                "ident": _U8,
                "position": _U8,
                "reserved0": _U8,
                "reserved1": _U32,
                "gem_one": _U8,
                "gem_two": _U8,
                "reborn_effect": _U8,
                "magic": _U8,
                "plus": _U8,
                "blees": _U8,
                "enchant": _U8,
                "reserved2": _U8,
                "restrain": _U32,
                "reserved3": _U32,
                "reserved4": _U32,
            },
        )

    def action_kind(self) -> ItemInfoAction:
        """The action, ``NONE`` for values without a name."""
        return ItemInfoAction.from_value(self.action)


@dataclass
class MsgNpcInfo:
    """Spawns an NPC to a player, optionally with its name."""

    PACKET_ID = 2030

    id: int = 0
    x: int = 0
    y: int = 0
    look: int = 0
    kind: int = 0
    sort: int = 0
    list_count: int = 0
    name: Optional[str] = None

    def __post_init__(self) -> None:
        _check_unsigned(
            self,
            {
                "id": _U32,
                "x": _U16,
                "y": _U16,
                "look": _U16,
                "kind": _U16,
                "sort": _U16,
                "list_count": _U8,
            },
        )

    def with_name(self, name: str) -> MsgNpcInfo:
        """A copy of this packet that also carries the NPC's name."""
        return dataclasses.replace(self, list_count=1, name=name)


class NpcActionKind(IntEnum):
    """Kinds of interaction with an NPC."""

    ACTIVATE = 0
    ADD_NPC = 1
    LEAVE_MAP = 2
    DELETE_NPC = 3
    CHANGE_POSITION = 4
    LAY_NPC = 5
    CANCEL_INTERACTION = 255

    @classmethod
    def from_value(cls, value: int) -> NpcActionKind:
        """The action for ``value``, or ``ACTIVATE`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.ACTIVATE


@dataclass
class MsgNpc:
    """A request to interact with an NPC."""

    PACKET_ID = 2031

    npc_id: int = 0
    data: int = 0
    action: int = 0
    npc_kind: int = 0

    def __post_init__(self) -> None:
        self.action = int(self.action)
        _check_unsigned(
            self,
            {"npc_id": _U32, "data": _U32, "action": _U16, "npc_kind": _U16},
        )

    def kind(self) -> NpcActionKind:
        """The requested interaction, ``ACTIVATE`` for values without a name."""
        return NpcActionKind.from_value(self.action)