"""Turn GameMap.dat and the map/portal CSV files into SQL insert statements."""

from __future__ import annotations

import argparse
import csv
import dataclasses
import os
import struct
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF
_PATH_PREFIX_LEN = 8


def _parse_unsigned(text: Optional[str], limit: int) -> int:
    if text is None:
        raise ValueError("missing field")
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        raise ValueError(f"invalid integer {text!r}")
    value = int(digits)
    if value > limit:
        raise ValueError(f"integer {text!r} out of range")
    return value


@dataclass
class MapRecord:
    """A row of Maps.csv; ``path`` is filled in from GameMap.dat."""

    uid: int = 0
    name: str = ""
    path: str = ""
    id: int = 0
    flags: int = 0
    weather: int = 0
    portal_x: int = 0
    portal_y: int = 0
    reborn_map: int = 0
    color: int = 4294967295

    @classmethod
    def from_row(cls, row: Mapping[str, Optional[str]]) -> MapRecord:
        name = row.get("Name")
        if name is None:
            raise ValueError("missing field Name")
        return cls(
            uid=_parse_unsigned(row.get("Uid"), _U32),
            name=name,
            id=_parse_unsigned(row.get("Id"), _U32),
            flags=_parse_unsigned(row.get("Flags"), _U32),
            weather=_parse_unsigned(row.get("Weather"), _U8),
            portal_x=_parse_unsigned(row.get("PortalX"), _U16),
            portal_y=_parse_unsigned(row.get("PortalY"), _U16),
            reborn_map=_parse_unsigned(row.get("RebornMap"), _U32),
            color=_parse_unsigned(row.get("Color"), _U32),
        )

    def sql(self) -> str:
        line = (
            f"INSERT INTO maps VALUES ({self.uid}, {self.id}, '{self.path}', "
            f"{self.portal_x}, {self.portal_y}, {self.flags}, {self.weather}, "
            f"{self.reborn_map}, {self.color});"
        )
        return line if self.path else f"-- {line}"


@dataclass(frozen=True)
class PortalRecord:
    """A row of Portals.csv."""

    id: int
    from_map_id: int
    from_x: int
    from_y: int
    to_map_id: int
    to_x: int
    to_y: int

    @classmethod
    def from_row(cls, row: Mapping[str, Optional[str]]) -> PortalRecord:
        return cls(
            id=_parse_unsigned(row.get("Id"), _U32),
            from_map_id=_parse_unsigned(row.get("FromMapId"), _U32),
            from_x=_parse_unsigned(row.get("FromX"), _U16),
            from_y=_parse_unsigned(row.get("FromY"), _U16),
            to_map_id=_parse_unsigned(row.get("ToMapId"), _U32),
            to_x=_parse_unsigned(row.get("ToX"), _U16),
            to_y=_parse_unsigned(row.get("ToY"), _U16),
        )

    def sql(self) -> str:
        return (
            f"INSERT INTO portals VALUES ({self.id}, {self.from_map_id}, "
            f"{self.from_x}, {self.from_y}, {self.to_map_id}, {self.to_x}, {self.to_y});"
        )


def _rows(path: str | os.PathLike) -> Iterable[dict]:
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle, restkey="\0extra")
        for row in reader:
            if "\0extra" in row:
                continue
            yield row


def load_maps(path: str | os.PathLike) -> dict[int, MapRecord]:
    """The valid rows of Maps.csv keyed by uid; malformed rows are skipped."""
    maps: dict[int, MapRecord] = {}
    for row in _rows(path):
        try:
            record = MapRecord.from_row(row)
        except ValueError:
            continue
        maps[record.uid] = record
    return maps


def load_portals(path: str | os.PathLike) -> list[PortalRecord]:
    """The valid rows of Portals.csv; malformed rows are skipped."""
    portals = []
    for row in _rows(path):
        try:
            portals.append(PortalRecord.from_row(row))
        except ValueError:
            continue
    return portals


def _strip_prefix(raw: bytes) -> str:
    text = raw.decode("utf-8")
    if len(raw) < _PATH_PREFIX_LEN:
        raise ValueError(f"map path too short: {text!r}")
    try:
        prefix = raw[:_PATH_PREFIX_LEN].decode("utf-8")
    except UnicodeDecodeError:
        raise ValueError(f"map path prefix splits a character: {text!r}") from None
    return text[len(prefix):]


def read_game_map_dat(data: bytes) -> dict[int, str]:
    """Map id to server map file name, read from the contents of GameMap.dat."""
    offset = 0

    def take(count: int) -> bytes:
        nonlocal offset
        if offset + count > len(data):
            raise ValueError("unexpected end of GameMap.dat")
        chunk = data[offset : offset + count]
        offset += count
        return chunk

    (amount,) = struct.unpack("<I", take(4))
    paths: dict[int, str] = {}
    for _ in range(amount):
        map_id, path_len = struct.unpack("<II", take(8))
        path = _strip_prefix(take(path_len)).replace(".DMap", ".cmap")
        paths[map_id] = path
        take(4)
    if len(paths) < amount:
        raise ValueError("GameMap.dat lists the same map id more than once")
    return paths


def render_sql(
    maps: Mapping[int, MapRecord],
    portals: Iterable[PortalRecord],
    paths: Mapping[int, str],
) -> str:
    """SQL inserts for maps and portals; rows without a map file are commented out."""
    repaired = {
        uid: (
            dataclasses.replace(record, path=paths[record.id])
            if not record.path and record.id in paths
            else record
        )
        for uid, record in maps.items()
    }
    lines = [record.sql() for record in repaired.values()]
    lines.append("")
    for portal in portals:
        source = repaired.get(portal.from_map_id)
        target = repaired.get(portal.to_map_id)
        usable = source is not None and target is not None and source.path and target.path
        lines.append(portal.sql() if usable else f"-- {portal.sql()}")
    return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gamemap-decoder",
        description="Print SQL inserts for the maps and portals of a data directory.",
    )
    parser.add_argument(
        "data_location",
        nargs="?",
        default=None,
        help="data directory (default: $DATA_LOCATION)",
    )
    args = parser.parse_args(argv)
    location = args.data_location or os.environ.get("DATA_LOCATION")
    if not location:
        print("Error: DATA_LOCATION is not set", file=sys.stderr)
        return 1
    data = Path(location)
    try:
        maps = load_maps(data / "Maps" / "Maps.csv")
        portals = load_portals(data / "Maps" / "Portals.csv")
        paths = read_game_map_dat((data / "GameMaps" / "GameMap.dat").read_bytes())
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(render_sql(maps, portals, paths))
    return 0


if __name__ == "__main__":
    sys.exit(main())