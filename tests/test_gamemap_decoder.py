import struct

import pytest

from coemu.gamemap_decoder import (
    MapRecord,
    PortalRecord,
    load_maps,
    load_portals,
    main,
    read_game_map_dat,
    render_sql,
)

MAPS_HEADER = "Uid,Name,Id,Flags,Weather,PortalX,PortalY,RebornMap,Color\n"
PORTALS_HEADER = "Id,FromMapId,FromX,FromY,ToMapId,ToX,ToY\n"


def _dat(entries):
    body = struct.pack("<I", len(entries))
    for map_id, path in entries:
        raw = path.encode()
        body += struct.pack("<II", map_id, len(raw)) + raw + b"\0\0\0\0"
    return body


def test_read_game_map_dat_strips_prefix_and_extension():
    paths = read_game_map_dat(_dat([(1000, "map/map/desert.DMap"), (1002, "map/map/newplain.DMap")]))
    assert paths == {1000: "desert.cmap", 1002: "newplain.cmap"}


def test_read_game_map_dat_truncated():
    data = _dat([(1000, "map/map/desert.DMap")])
    with pytest.raises(ValueError):
        read_game_map_dat(data[:-6])


def test_read_game_map_dat_duplicate_ids():
    with pytest.raises(ValueError):
        read_game_map_dat(_dat([(1, "map/map/a.DMap"), (1, "map/map/b.DMap")]))


def test_read_game_map_dat_short_path():
    with pytest.raises(ValueError):
        read_game_map_dat(_dat([(1, "a.DMap")]))


def test_load_maps_skips_bad_rows(tmp_path):
    path = tmp_path / "Maps.csv"
    path.write_text(
        MAPS_HEADER
        + "1000,Desert,1000,0,1,10,20,1002,4294967295\n"
        + "1001,Bad,x,0,1,10,20,1002,0\n"
        + "1003,Weather,1003,0,300,10,20,1002,0\n"
    )
    maps = load_maps(path)
    assert list(maps) == [1000]
    record = maps[1000]
    assert record.name == "Desert"
    assert record.path == ""
    assert (record.portal_x, record.portal_y, record.reborn_map) == (10, 20, 1002)


def test_load_portals(tmp_path):
    path = tmp_path / "Portals.csv"
    path.write_text(PORTALS_HEADER + "1,1000,5,6,1002,7,8\n" + "2,1000,-1,6,1002,7,8\n")
    assert load_portals(path) == [PortalRecord(1, 1000, 5, 6, 1002, 7, 8)]


def test_render_sql_repairs_paths_and_comments_missing():
    maps = {
        1: MapRecord(uid=1, name="A", id=1000, color=5),
        2: MapRecord(uid=2, name="B", id=999, color=6),
    }
    portals = [
        PortalRecord(1, 1, 1, 2, 1, 3, 4),
        PortalRecord(2, 1, 1, 2, 2, 3, 4),
    ]
    out = render_sql(maps, portals, {1000: "desert.cmap"})
    assert out.splitlines() == [
        "INSERT INTO maps VALUES (1, 1000, 'desert.cmap', 0, 0, 0, 0, 0, 5);",
        "-- INSERT INTO maps VALUES (2, 999, '', 0, 0, 0, 0, 0, 6);",
        "",
        "INSERT INTO portals VALUES (1, 1, 1, 2, 1, 3, 4);",
        "-- INSERT INTO portals VALUES (2, 1, 1, 2, 2, 3, 4);",
    ]
    assert maps[1].path == ""


def test_main_prints_sql(tmp_path, capsys):
    (tmp_path / "Maps").mkdir()
    (tmp_path / "GameMaps").mkdir()
    (tmp_path / "Maps" / "Maps.csv").write_text(MAPS_HEADER + "7,Arena,1005,0,0,1,2,1002,9\n")
    (tmp_path / "Maps" / "Portals.csv").write_text(PORTALS_HEADER + "3,7,1,1,8,2,2\n")
    (tmp_path / "GameMaps" / "GameMap.dat").write_bytes(_dat([(1005, "map/map/arena.DMap")]))
    assert main([str(tmp_path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "INSERT INTO maps VALUES (7, 1005, 'arena.cmap', 1, 2, 0, 0, 1002, 9);"
    assert lines[2].startswith("-- INSERT INTO portals VALUES (3,")


def test_main_missing_files(tmp_path, capsys):
    assert main([str(tmp_path)]) == 1
    assert "Error" in capsys.readouterr().err