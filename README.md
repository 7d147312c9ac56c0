# coemu

Building blocks for a classic MMORPG game server, plus a command-line tool
that turns map data files into SQL.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

- `coemu.lohi`: the current Unix timestamp (`current_ts`), and splitting or
  joining 16-, 32- or 64-bit integers into their low and high halves (`lo`,
  `hi`, `construct`). Packets use this to pack two coordinates into one field.
- `coemu.actions`: `MsgAction` with `ActionType` and `KillMode`, the notice
  text for each kill mode (`kill_mode_notice`), and `MsgItem` with
  `ItemActionType` and its ping reply (`MsgItem.ping_reply`).
- `coemu.talk`: chat (`MsgTalk`, `TalkChannel`, `TalkStyle`), connection and
  transfer packets (`MsgConnect`, `MsgTransfer`), server time (`MsgData`,
  `DataAction`), walking (`MsgWalk`, `MovementType`), weather (`MsgWeather`,
  `WeatherKind`) and map information (`MsgMapInfo`, `MapFlags`).
- `coemu.info`: player, user, item and NPC information packets (`MsgPlayer`,
  `MsgUserInfo`, `MsgItemInfo`, `MsgNpcInfo`) and NPC interaction (`MsgNpc`,
  `NpcActionKind`).
- `coemu.dialog`: `MsgTaskDialog` and a `DialogBuilder` that puts NPC dialog
  packets together in the order the client expects: text first, then options
  and edits, then `and_()`, then the avatar, then `build()`. Calling the steps
  out of order raises `DialogBuilderError`.
- `coemu.floor`: a map's tile grid (`Floor`, `Tile`, `TileType`). It loads the
  compact server map format from `<data>/Maps/`, converts a client DMap file
  from `<data>/GameMaps/map/` when no compact file exists yet, and saves the
  result. The data directory is given to `Floor` or taken from the
  `DATA_LOCATION` environment variable. Problems raise `FloorError`.
- `coemu.commands`: parsing of in-game `$` commands (`dc`, `jump-back`,
  `which`, `tele`, `weather`) with `parse_command`. Bad input raises
  `CommandError`, whose `output` holds the usage or error text.
- `coemu.world`: map identifiers (`Maps`), portals (`Portal`, identified by
  their source position), and the regions that split a map into screen-sized
  blocks (`MapRegion`, `RegionGrid`).
- `coemu.state`: login and character-creation tokens (`TokenStore`). Removing
  a token that is not stored raises `TokenNotFound`.

## Generating map and portal SQL

```
coemu-gamemap-decoder [DATA_LOCATION]
```

The tool reads `GameMaps/GameMap.dat`, `Maps/Maps.csv` and `Maps/Portals.csv`
from the data directory given as the argument, or named by the
`DATA_LOCATION` environment variable, and prints `INSERT INTO maps` and
`INSERT INTO portals` statements. Malformed CSV rows are skipped. A map that
has no path takes the path that `GameMap.dat` lists for its map id.
Statements for maps still without a path, and for portals that lead to or come
from such maps, are printed commented out.

The same steps are available from Python as `read_game_map_dat`, `load_maps`,
`load_portals` and `render_sql` in `coemu.gamemap_decoder`.

## What this package does not do

It holds the pieces a game server is made of, not a running server: it opens
no network connections, encrypts no traffic, encodes no packets to bytes and
keeps no database of accounts or characters. It also has no tool for hashing
account passwords.