"""Maps, portals and the grid of regions that tracks entities on a map."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, Optional

from .lohi import construct

SCREEN_DISTANCE = 18


class Maps(IntEnum):
    """Well-known map identities."""

    UNKNOWN = 0
    DESERT = 1000
    NEWPLAIN = 1002
    MINE01 = 1003
    FORUM = 1004
    ARENA = 1005
    HORSE = 1006
    STAR01 = 1100
    STAR02 = 1101
    STAR03 = 1102
    STAR04 = 1103
    STAR05 = 1104
    STAR10 = 1105
    STAR06 = 1106
    STAR07 = 1107
    STAR08 = 1108
    STAR09 = 1109
    SMITH = 1007
    GROCERY = 1008
    NEWBIE = 1010
    WOODS = 1011
    SKY = 1012
    TIGER = 1013
    DRAGON = 1014
    ISLAND = 1015
    QILING = 1016
    CANYON = 1020
    MINE = 1021
    BRAVE = 1022
    MINE_ONE = 1025
    MINE_TWO = 1026
    MINE_THREE = 1027
    MINE_FOUR = 1028
    MINE_ONE2 = 1029
    MINE_TWO2 = 1030
    MINE_THREE2 = 1031
    MINE_FOUR2 = 1032
    PRISON = 6000
    STREET = 1036
    FACTION_BLACK = 1037
    FACTION = 1038
    PLAYGROUND = 1039
    SKYCUT = 1040
    SKYMAZE = 1041
    LINEUP_PASS = 1042
    LINEUP = 1043
    RISKISLAND = 1051
    SKYMAZE1 = 1060
    SKYMAZE2 = 1061
    SKYMAZE3 = 1062
    STAR = 1064
    BOA = 1070
    P_ARENA = 1080
    NEWCANYON = 1075
    NEWWOODS = 1076
    NEWDESERT = 1077
    NEWISLAND = 1078
    MYS_ISLAND = 1079
    IDLAND_MAP = 1082
    PARENA_M = 1090
    PARENA_S = 1091
    HOUSE01 = 1098
    HOUSE03 = 1099
    SANCTUARY = 1601
    TASK01 = 1201
    TASK02 = 1202
    TASK04 = 1204
    TASK05 = 1205
    TASK07 = 1207
    TASK08 = 1208
    TASK10 = 1210
    TASK11 = 1211
    ISLAND_SNAIL = 1212
    DESERT_SNAIL = 1213
    CANYON_FAIRY = 1214
    WOODS_FAIRY = 1215
    NEWPLAIN_FAIRY = 1216
    MINE_A = 1500
    MINE_B = 1501
    MINE_C = 1502
    MINE_D = 1503
    S_TASK01 = 1351
    S_TASK02 = 1352
    S_TASK03 = 1353
    S_TASK04 = 1354
    SLPK = 1505
    HHPK = 1506
    BLPK = 1507
    YMPK = 1508
    MFPK = 1509
    FACTION01 = 1550
    JOKUL01 = 1615
    TIEMFILES = 1616
    DGATE = 2021
    DSQUARE = 2022
    DCLOISTER = 2023
    DSIGIL = 2024
    CORDIFORM = 1645
    NHOUSE04 = 601
    ARENA_NONE = 700
    FAIRYLANDPK07 = 1760
    HALLOWEEN2007_A = 1766
    HALLOWEEN2007_BOSS = 1767
    WOODS_Z = 1066
    QILING_Z = 1067
    FAIRYLANDPK03 = 1764
    ICECRYPT_LEV1 = 1762

    @classmethod
    def from_value(cls, value: int) -> Maps:
        """The map for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(eq=False)
class Portal:
    """A portal from a point on one map to a point on another.

    Portals are identified by their source position, so two portals leaving
    from the same tile are the same portal.
    """

    uid: int
    from_map_id: int
    from_x: int
    from_y: int
    to_map_id: int
    to_x: int
    to_y: int

    def __post_init__(self) -> None:
        for name in ("from_x", "from_y", "to_x", "to_y"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"{name} out of range: {value}")

    def id(self) -> int:
        """The identity of the portal: its source ``(x, y)`` packed into 32 bits."""
        return construct(self.from_y, self.from_x)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Portal):
            return NotImplemented
        return self.id() == other.id()

    def __hash__(self) -> int:
        return hash(self.id())


def _regions_across(size: int, region_size: int) -> int:
    return max(0, math.ceil(size / region_size))


@dataclass(eq=False)
class MapRegion:
    """A block of a map holding the entities inside it."""

    start_point: tuple[int, int] = (0, 0)
    map_size: tuple[int, int] = (0, 0)
    size: int = SCREEN_DISTANCE
    entities: dict[int, Any] = field(default_factory=dict)

    def id(self) -> int:
        """The index of the region within its map's grid."""
        width = _regions_across(self.map_size[0], self.size)
        x, y = self.start_point
        return x * width + y

    def is_empty(self) -> bool:
        return not self.entities

    def insert(self, entity_id: int, entity: Any) -> None:
        """Place ``entity`` in this region, replacing any with the same id."""
        self.entities[entity_id] = entity

    def remove(self, entity_id: int) -> Optional[Any]:
        """Take the entity out of this region; ``None`` if it was not here."""
        return self.entities.pop(entity_id, None)

    def get(self, entity_id: int) -> Optional[Any]:
        return self.entities.get(entity_id)

    def __len__(self) -> int:
        return len(self.entities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapRegion):
            return NotImplemented
        return self.start_point == other.start_point

    def __hash__(self) -> int:
        return hash(self.start_point)

    def __str__(self) -> str:
        return f"Region #{self.id()} with {len(self.entities)} entity"


class RegionGrid:
    """The regions covering a map of ``width`` by ``height`` tiles."""

    def __init__(self, width: int, height: int, region_size: int = SCREEN_DISTANCE) -> None:
        if region_size <= 0:
            raise ValueError(f"region_size must be positive: {region_size}")
        self.map_size = (width, height)
        self.region_size = region_size
        self.width = _regions_across(width, region_size)
        self.height = _regions_across(height, region_size)
        count = self.width * self.height
        regions = [MapRegion(size=region_size) for _ in range(count)]
        for y in range(self.height):
            for x in range(self.width):
                index = x * self.width + y
                if index >= count:
                    raise ValueError(
                        f"region ({x}, {y}) does not fit a {width}x{height} map"
                    )
                regions[index] = MapRegion((x, y), self.map_size, region_size)
        self.regions = regions

    def _at(self, index: int) -> Optional[MapRegion]:
        if 0 <= index < len(self.regions):
            return self.regions[index]
        return None

    def region(self, x: int, y: int) -> Optional[MapRegion]:
        """The region holding tile ``(x, y)``, or ``None``."""
        region_x = x // self.region_size
        region_y = y // self.region_size
        return self._at(region_x * self.width + region_y)

    def surrounding_regions(
        self, x: int, y: int, offsets: Iterable[tuple[int, int]]
    ) -> list[MapRegion]:
        """The region of ``(x, y)`` followed by its neighbours at ``offsets``."""
        region_x = x // self.region_size
        region_y = y // self.region_size
        result = []
        current = self._at(region_x * self.width + region_y)
        if current is not None:
            result.append(current)
        for dx, dy in offsets:
            view_x = region_x + dx
            view_y = region_y + dy
            if view_x < 0 or view_y < 0 or view_x >= self.width or view_y >= self.height:
                continue
            neighbour = self._at(view_x * self.width + view_y)
            if neighbour is not None:
                result.append(neighbour)
        return result

    def move(
        self,
        entity_id: int,
        entity: Any,
        old: tuple[int, int],
        new: tuple[int, int],
    ) -> Optional[MapRegion]:
        """Move an entity from the region of ``old`` to that of ``new``.

        Nothing changes when both positions share a region. Returns the region
        of ``new``, or ``None`` if it lies outside the grid.
        """
        region = self.region(*new)
        old_region = self.region(*old)
        if region is not None and old_region is not None:
            if region != old_region:
                region.insert(entity_id, entity)
                old_region.remove(entity_id)
        elif region is not None:
            region.insert(entity_id, entity)
        elif old_region is not None:
            old_region.remove(entity_id)
        return region

    def remove(self, entity_id: int, x: int, y: int) -> Optional[Any]:
        """Take an entity at ``(x, y)`` out of its region."""
        region = self.region(x, y)
        if region is None:
            return None
        return region.remove(entity_id)

    def is_empty(self) -> bool:
        """Whether no region holds any entity."""
        return all(region.is_empty() for region in self.regions)