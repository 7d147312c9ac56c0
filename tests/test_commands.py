import pytest

from coemu.commands import (
    CommandError,
    DcCommand,
    JumpBackCommand,
    TeleportCommand,
    WeatherCommand,
    WhichCommand,
    parse_command,
)
from coemu.talk import MsgTalk, WeatherKind


def test_disconnect():
    assert parse_command(["dc"]) == DcCommand()


def test_jump_back():
    assert parse_command(["jump-back"]) == JumpBackCommand()


def test_which_with_and_without_switch():
    assert parse_command(["which", "--map"]) == WhichCommand(map=True)
    assert parse_command(["which"]) == WhichCommand(map=False)


def test_teleport():
    assert parse_command(["tele", "1005", "50", "60"]) == TeleportCommand(1005, 50, 60, False)


def test_teleport_all_option():
    cmd = parse_command(["tele", "--all", "true", "1002", "430", "378"])
    assert cmd == TeleportCommand(1002, 430, 378, True)


def test_weather():
    cmd = parse_command(["weather", "2"])
    assert cmd == WeatherCommand(2)
    assert cmd.weather() is WeatherKind.RAIN


def test_from_chat_message():
    msg = MsgTalk(message="$tele 1005 40 45")
    assert parse_command(msg.command_args()) == TeleportCommand(1005, 40, 45)


def test_empty_command():
    with pytest.raises(CommandError) as info:
        parse_command([])
    assert "dc" in info.value.output


def test_unknown_subcommand():
    with pytest.raises(CommandError) as info:
        parse_command(["fly"])
    assert "fly" in info.value.output


def test_missing_positionals():
    with pytest.raises(CommandError) as info:
        parse_command(["tele", "1005"])
    lines = info.value.lines()
    assert lines[1:] == ["    x", "    y"]


def test_invalid_number():
    with pytest.raises(CommandError) as info:
        parse_command(["tele", "abc", "1", "2"])
    assert "map_id" in info.value.output


def test_coordinate_out_of_range():
    with pytest.raises(CommandError) as info:
        parse_command(["tele", "1005", "70000", "2"])
    assert "70000" in info.value.output


def test_extra_argument():
    with pytest.raises(CommandError) as info:
        parse_command(["dc", "now"])
    assert "now" in info.value.output


def test_unknown_option():
    with pytest.raises(CommandError):
        parse_command(["which", "--city"])


def test_option_without_value():
    with pytest.raises(CommandError) as info:
        parse_command(["tele", "1", "2", "3", "--all"])
    assert "--all" in info.value.output


def test_bad_boolean_option():
    with pytest.raises(CommandError):
        parse_command(["tele", "1", "2", "3", "--all", "yes"])


def test_duplicate_switch():
    with pytest.raises(CommandError):
        parse_command(["which", "--map", "--map"])


def test_help_output():
    with pytest.raises(CommandError) as info:
        parse_command(["--help"])
    assert info.value.lines()[0].startswith("Usage: commands")


def test_subcommand_help():
    with pytest.raises(CommandError) as info:
        parse_command(["tele", "--help"])
    assert info.value.lines()[0].startswith("Usage: commands tele")


def test_lines_skip_leading_blanks():
    err = CommandError("\n\nfirst\nsecond\n")
    assert err.lines() == ["first", "second"]