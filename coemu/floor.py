"""The coordinate tile grid of a map, loaded from compressed or client map files."""

from __future__ import annotations

import dataclasses
import os
import struct
import threading
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path, PurePath

_DMAP_HEADER = 0x10C
_SCENE_NAME_LEN = 260
_SCENE_PART_HEADER = 0x14C
_DDS_COVER_LEN = 0x1A0
_EFFECT_LEN = 0x48
_SOUND_LEN = 0x114
_MARKET_SURFACE = 16


class FloorError(Exception):
    """A map file could not be read, converted or written."""


class TileType(IntEnum):
    """Access types of a tile."""

    TERRAIN = 0
    NPC = 1
    MONSTER = 2
    PORTAL = 3
    ITEM = 4
    MARKET_SPOT = 5
    AVAILABLE = 6
    UNKNOWN = 255

    @classmethod
    def from_value(cls, value: int) -> TileType:
        """The tile type for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class SceneryType(IntEnum):
    """Kinds of scenery entries in a client map file."""

    SCENERY_OBJECT = 1
    DDS_COVER = 4
    EFFECT = 10
    SOUND = 15
    UNKNOWN = 255

    @classmethod
    def from_value(cls, value: int) -> SceneryType:
        """The scenery type for ``value``, or ``UNKNOWN`` if there is none."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Tile:
    """One cell of the grid: who may stand on it and how high it is."""

    access: TileType = TileType.UNKNOWN
    elevation: int = 0


class _Reader:
    """Little-endian reads over a byte string that fail cleanly at the end."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def take(self, count: int) -> bytes:
        if count < 0 or self._pos + count > len(self._data):
            raise FloorError("unexpected end of map data")
        chunk = self._data[self._pos : self._pos + count]
        self._pos += count
        return chunk

    def skip(self, count: int) -> None:
        self.take(count)

    def _unpack(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.take(size))[0]

    def u8(self) -> int:
        return self._unpack("<B")

    def u16(self) -> int:
        return self._unpack("<H")

    def i32(self) -> int:
        return self._unpack("<i")


def _set_access(coordinates: list[Tile], index: int, access: TileType) -> None:
    if not 0 <= index < len(coordinates):
        raise FloorError(f"tile index {index} is outside the map")
    coordinates[index] = dataclasses.replace(coordinates[index], access=access)


def _blank_grid(width: int, height: int) -> list[Tile]:
    if width < 0 or height < 0:
        raise FloorError(f"invalid map size {width}x{height}")
    return [Tile()] * (width * height)


class Floor:
    """A map's tile grid.

    The grid is read from ``<data>/Maps/<path>``; when that file is missing it
    is converted from the client's ``<data>/GameMaps/map/<name>.DMap`` and the
    compressed result is written back.
    """

    def __init__(self, path: str | PurePath, data_location: str | os.PathLike | None = None) -> None:
        self.path = PurePath(path)
        self._data_location = data_location
        self._coordinates: list[Tile] = []
        self._width = 0
        self._height = 0
        self._loaded = False
        self._lock = threading.RLock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def boundaries(self) -> tuple[int, int]:
        """The ``(width, height)`` of the grid."""
        return self._width, self._height

    def _data_dir(self) -> Path:
        location = self._data_location
        if location is None:
            location = os.environ.get("DATA_LOCATION")
        if location is None:
            raise FloorError("DATA_LOCATION is not set")
        return Path(location)

    def _map_path(self) -> Path:
        return self._data_dir() / "Maps" / self.path

    def tile(self, x: int, y: int) -> Tile | None:
        """The tile at ``(x, y)``, or ``None`` outside the loaded grid."""
        with self._lock:
            index = x * self._width + y
            if 0 <= index < len(self._coordinates):
                return self._coordinates[index]
            return None

    def load(self) -> None:
        """Load the grid, converting the client map file if needed."""
        with self._lock:
            if self._loaded:
                return
            map_path = self._map_path()
            if map_path.exists():
                self._load_compressed(map_path.read_bytes())
            else:
                original = (
                    self._data_dir() / "GameMaps" / "map" / self.path.with_suffix(".DMap")
                )
                self._convert_and_load(original)

    def _load_compressed(self, data: bytes) -> None:
        reader = _Reader(data)
        width = reader.i32()
        height = reader.i32()
        coordinates = _blank_grid(width, height)
        for y in range(height):
            for x in range(width):
                access = TileType.from_value(reader.u8())
                elevation = reader.u16()
                index = x * width + y
                if not 0 <= index < len(coordinates):
                    raise FloorError(f"tile index {index} is outside the map")
                coordinates[index] = Tile(access, elevation)
        self._width, self._height = width, height
        self._coordinates = coordinates
        self._loaded = True

    def unload(self) -> None:
        """Drop the grid from memory; a later ``load`` reads it again."""
        with self._lock:
            self._coordinates = []
            self._loaded = False

    def _convert_and_load(self, path: Path) -> None:
        reader = _Reader(path.read_bytes())
        reader.skip(_DMAP_HEADER)
        width = reader.i32()
        height = reader.i32()
        coordinates = _blank_grid(width, height)

        for y in range(height):
            for x in range(width):
                access = TileType.AVAILABLE if reader.u16() == 0 else TileType.TERRAIN
                surface = reader.u16()
                elevation = reader.u16()
                if surface == _MARKET_SURFACE:
                    access = TileType.MARKET_SPOT
                coordinates[x * width + y] = Tile(access, elevation)
            reader.skip(4)

        for _ in range(reader.i32()):
            px = reader.i32() - 1
            py = reader.i32() - 1
            reader.skip(4)
            for dx in range(3):
                for dy in range(3):
                    if py + dy < height and px + dx < width:
                        index = (px + dx) * width + (py + dy)
                        _set_access(coordinates, index, TileType.PORTAL)

        for _ in range(reader.i32()):
            kind = SceneryType.from_value(reader.i32() & 0xFF)
            if kind is SceneryType.SCENERY_OBJECT:
                self._apply_scene(reader, coordinates, width)
            elif kind is SceneryType.DDS_COVER:
                reader.skip(_DDS_COVER_LEN)
            elif kind is SceneryType.EFFECT:
                reader.skip(_EFFECT_LEN)
            elif kind is SceneryType.SOUND:
                reader.skip(_SOUND_LEN)

        self._width, self._height = width, height
        self._coordinates = coordinates
        self._loaded = True
        self.save()

    def _apply_scene(self, reader: _Reader, coordinates: list[Tile], width: int) -> None:
        raw_name = reader.take(_SCENE_NAME_LEN)
        end = raw_name.find(b"\0")
        if end < 0:
            raise FloorError("invalid scene file name")
        try:
            name = raw_name[:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FloorError(f"invalid scene file name: {exc}") from None
        name = name.replace("map\\", "").replace("\\", "/")
        scene_path = (self._data_dir() / "GameMaps" / name).resolve(strict=True)
        location_x = reader.i32()
        location_y = reader.i32()

        scene = _Reader(scene_path.read_bytes())
        for _ in range(scene.i32()):
            scene.skip(_SCENE_PART_HEADER)
            scene_width = scene.i32()
            scene_height = scene.i32()
            scene.skip(4)
            start_x = scene.i32()
            start_y = scene.i32()
            scene.skip(4)
            for y in range(scene_height):
                for x in range(scene_width):
                    px = location_x + start_x - x
                    py = location_y + start_y - y
                    access = TileType.AVAILABLE if scene.i32() == 0 else TileType.TERRAIN
                    _set_access(coordinates, px * width + py, access)
                    scene.skip(8)

    def save(self) -> bool:
        """Write the grid as a compressed map unless that file already exists.

        Returns whether a file was written.
        """
        with self._lock:
            width, height = self._width, self._height
            map_path = self._map_path()
            if map_path.exists() or width * height == 0 or not self._coordinates:
                return False
            buffer = bytearray(struct.pack("<ii", width, height))
            for y in range(height):
                for x in range(width):
                    tile = self.tile(x, y)
                    if tile is None:
                        raise FloorError(f"tile ({x}, {y}) not found")
                    buffer += struct.pack("<BH", int(tile.access), tile.elevation)
            map_path.write_bytes(bytes(buffer))
            return True