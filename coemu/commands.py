"""Parsing of in-game chat commands such as ``$tele 1005 50 50``."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import dropwhile
from typing import Callable, Iterable, Union

from .talk import WeatherKind

_PROGRAM = "commands"


class CommandError(Exception):
    """A command could not be parsed; ``output`` holds the text for the player."""

    def __init__(self, output: str) -> None:
        super().__init__(output)
        self.output = output

    def lines(self) -> list[str]:
        """The output's lines, without leading blank ones."""
        return list(dropwhile(lambda line: not line, self.output.splitlines()))


@dataclass(frozen=True)
class DcCommand:
    """Disconnect from the server."""


@dataclass(frozen=True)
class JumpBackCommand:
    """Jump back to the previous location."""


@dataclass(frozen=True)
class WhichCommand:
    """Ask about things in the environment."""

    map: bool = False


@dataclass(frozen=True)
class TeleportCommand:
    """Teleport to a location on another map."""

    map_id: int
    x: int
    y: int
    all: bool = False


@dataclass(frozen=True)
class WeatherCommand:
    """Change the current map's weather."""

    kind: int

    def weather(self) -> WeatherKind:
        return WeatherKind.from_value(self.kind)


Command = Union[DcCommand, JumpBackCommand, WhichCommand, TeleportCommand, WeatherCommand]


def _unsigned(bits: int) -> Callable[[str], int]:
    limit = (1 << bits) - 1

    def parse(text: str) -> int:
        if not text:
            raise ValueError("cannot parse integer from empty string")
        digits = text[1:] if text.startswith("+") else text
        if not digits or not all("0" <= ch <= "9" for ch in digits):
            raise ValueError("invalid digit found in string")
        value = int(digits)
        if value > limit:
            raise ValueError("number too large to fit in target type")
        return value

    return parse


def _boolean(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError("provided string was not `true` or `false`")


@dataclass(frozen=True)
class _Spec:
    name: str
    factory: Callable[..., Command]
    description: str
    positionals: tuple[tuple[str, Callable[[str], object]], ...] = ()
    switches: dict[str, str] = field(default_factory=dict)
    options: dict[str, tuple[Callable[[str], object], object, str]] = field(
        default_factory=dict
    )


_SPECS = {
    spec.name: spec
    for spec in (
        _Spec("dc", DcCommand, "Disconnect From Server"),
        _Spec(
            "which",
            WhichCommand,
            "Ask about things in your environment",
            switches={"map": "get your current map (ID, Name)"},
        ),
        _Spec(
            "tele",
            TeleportCommand,
            "Teleport to other map at specific location",
            positionals=(("map_id", _unsigned(32)), ("x", _unsigned(16)), ("y", _unsigned(16))),
            options={"all": (_boolean, False, "teleport all characters with you")},
        ),
        _Spec("jump-back", JumpBackCommand, "Jump Back to prev location"),
        _Spec(
            "weather",
            WeatherCommand,
            "Change the current map's weather",
            positionals=(("kind", _unsigned(32)),),
        ),
    )
}


def _top_help() -> str:
    lines = [
        f"Usage: {_PROGRAM} <command> [<args>]",
        "",
        "In Game Commands",
        "",
        "Options:",
        "  --help            display usage information",
        "",
        "Commands:",
    ]
    lines += [f"  {spec.name:<18}{spec.description}" for spec in _SPECS.values()]
    return "\n".join(lines) + "\n"


def _sub_help(spec: _Spec) -> str:
    usage = [f"Usage: {_PROGRAM} {spec.name}"]
    usage += [f"<{name}>" for name, _ in spec.positionals]
    usage += [f"[--{name}]" for name in spec.switches]
    usage += [f"[--{name} <{name}>]" for name in spec.options]
    lines = [" ".join(usage), "", spec.description, ""]
    if spec.positionals:
        lines.append("Positional Arguments:")
        lines += [f"  {name}" for name, _ in spec.positionals]
        lines.append("")
    lines.append("Options:")
    lines += [f"  --{name:<16}{text}" for name, text in spec.switches.items()]
    lines += [f"  --{name:<16}{text}" for name, (_, _, text) in spec.options.items()]
    lines.append("  --help            display usage information")
    return "\n".join(lines) + "\n"


def _missing_subcommand() -> str:
    names = "\n".join(f"    {name}" for name in ("help", *_SPECS))
    return f"One of the following subcommands must be present:\n{names}\n"


def _parse_sub(spec: _Spec, args: list[str]) -> Command:
    values: dict[str, object] = {}
    raw_positionals: list[str] = []
    it = iter(args)
    for arg in it:
        if arg == "--help":
            raise CommandError(_sub_help(spec))
        if arg.startswith("--"):
            name = arg[2:]
            if name in values:
                raise CommandError(f"Duplicate value for non-repeating option '{arg}'.\n")
            if name in spec.switches:
                values[name] = True
            elif name in spec.options:
                value = next(it, None)
                if value is None:
                    raise CommandError(f"No value provided for option '{arg}'.\n")
                parser = spec.options[name][0]
                try:
                    values[name] = parser(value)
                except ValueError as exc:
                    raise CommandError(
                        f"Error parsing option '{arg}' with value '{value}': {exc}\n"
                    ) from None
            else:
                raise CommandError(f"Unrecognized argument: {arg}\n")
        elif len(raw_positionals) < len(spec.positionals):
            raw_positionals.append(arg)
        else:
            raise CommandError(f"Unrecognized argument: {arg}\n")

    missing = [name for name, _ in spec.positionals[len(raw_positionals) :]]
    if missing:
        names = "\n".join(f"    {name}" for name in missing)
        raise CommandError(f"Required positional arguments not provided:\n{names}\n")

    for (name, parser), raw in zip(spec.positionals, raw_positionals):
        try:
            values[name] = parser(raw)
        except ValueError as exc:
            raise CommandError(
                f"Error parsing positional argument '{name}' with value '{raw}': {exc}\n"
            ) from None

    for name in spec.switches:
        values.setdefault(name, False)
    for name, (_, default, _) in spec.options.items():
        values.setdefault(name, default)
    return spec.factory(**values)


def parse_command(args: Iterable[str]) -> Command:
    """Parse the words of a command (without the leading ``$``)."""
    args = list(args)
    if not args:
        raise CommandError(_missing_subcommand())
    head, rest = args[0], args[1:]
    if head in ("--help", "help"):
        raise CommandError(_top_help())
    spec = _SPECS.get(head)
    if spec is None:
        raise CommandError(f"Unrecognized argument: {head}\n")
    return _parse_sub(spec, rest)