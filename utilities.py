# utilities.py
from __future__ import annotations

import re
from pathlib import Path

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import MalformedConfig, TruncatedConfig
from machine import Machine
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_num_re = re.compile(r"^([A-Za-z]+)(\d+)$")
_type_re = re.compile(r"^([MNR])(\S*)$")


def natural_key(name: str):
    """Natural-sort rotor names so I, II, III, …, R1, R2, …, R10"""
    m = _num_re.match(name)
    if m:
        prefix, num = m.groups()
        return (0, prefix, int(num))
    return (1, name, 0)


def group_blocks(text: str, block: int = 5) -> str:
    """Split *text* into runs of *block* symbols joined by single spaces."""
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


class _Tokens:
    """Whitespace-separated tokens of a configuration text with one-token lookahead."""

    def __init__(self, text: str) -> None:
        self._items = text.split()
        self._pos = 0

    def peek(self) -> str | None:
        if self._pos < len(self._items):
            return self._items[self._pos]
        return None

    def take(self, what: str) -> str:
        tok = self.peek()
        if tok is None:
            raise TruncatedConfig(f"configuration file truncated: expected {what}")
        self._pos += 1
        return tok

    def take_int(self, what: str) -> int:
        tok = self.take(what)
        try:
            return int(tok)
        except ValueError:
            raise MalformedConfig(f"expected {what}, found {tok!r}") from None


# ────────────────────────────────────────────────────────────────────────
#  1. Configuration file
# ────────────────────────────────────────────────────────────────────────


def read_rotor(tokens: _Tokens, alphabet: Alphabet) -> Rotor:
    """Read one ``<name> <type><notches> <cycles...>`` block."""
    name = tokens.take("rotor name")
    if name.startswith("("):
        raise MalformedConfig(f"expected rotor name, found wiring {name!r}")

    kind_tok = tokens.take(f"type of rotor {name}")
    m = _type_re.match(kind_tok)
    if not m:
        raise MalformedConfig(f"rotor {name}: unknown type {kind_tok!r}")
    kind, notches = RotorKind(m.group(1)), m.group(2)

    wiring: list[str] = []
    while (tokens.peek() or "").startswith("("):
        wiring.append(tokens.take("wiring"))
    if not wiring:
        raise MalformedConfig(f"rotor {name} has no wiring")

    perm = Permutation(" ".join(wiring), alphabet)
    debug.log("config", "rotor %s %s%s %s", name, kind.value, notches, perm.cycles())
    return Rotor(name, perm, kind, notches)


def read_config(text: str) -> Machine:
    """Build a machine from the text of a configuration file."""
    tokens = _Tokens(text)
    alphabet = Alphabet(tokens.take("alphabet"))
    num_rotors = tokens.take_int("number of rotor slots")
    num_pawls = tokens.take_int("number of pawls")

    rotors: list[Rotor] = []
    while tokens.peek() is not None:
        rotors.append(read_rotor(tokens, alphabet))

    return Machine(alphabet, num_rotors, num_pawls, rotors)


def load_config(path: str | Path) -> Machine:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        raise MalformedConfig(f"could not open {path}") from None
    except UnicodeDecodeError as excp:
        raise MalformedConfig(f"{path} is not valid UTF-8 (byte {excp.start})") from None
    return read_config(text)


def format_rotor(rotor: Rotor) -> str:
    """Render *rotor* as a configuration-file block."""
    cycles = rotor.permutation.cycles()
    if not cycles:
        # the file grammar needs at least one cycle token
        cycles = f"({rotor.alphabet.to_symbol(0)})"
    return f"{rotor.name:<5} {rotor.kind.value + rotor.notches:<5} {cycles}"


def format_config(alphabet: Alphabet, num_rotors: int, num_pawls: int, rotors) -> str:
    lines = [str(alphabet), f"{num_rotors} {num_pawls}"]
    lines.extend(format_rotor(rotor) for rotor in rotors)
    return "\n".join(lines) + "\n"


# ────────────────────────────────────────────────────────────────────────
#  2. Setting lines
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.startswith("*")


def apply_setting_line(machine: Machine, line: str) -> None:
    """Configure *machine* from ``* r0 r1 … settings (plug cycles)…``."""
    stripped = line.lstrip()
    if not stripped.startswith("*"):
        raise MalformedConfig(f"Not a settings line: {line!r}")

    fields = stripped[1:].split()
    n = machine.num_rotors
    if len(fields) < n + 1:
        raise MalformedConfig(
            f"Setting line needs {n} rotor names and a setting: {line!r}"
        )
    names, setting = fields[:n], fields[n]
    plugboard = Permutation(" ".join(fields[n + 1 :]), machine.alphabet)

    machine.configure(names, setting, plugboard)
    debug.log("config", "settings %s plugboard %s", setting,
              plugboard.cycles() or "empty")


__all__ = [
    "apply_setting_line",
    "format_config",
    "format_rotor",
    "group_blocks",
    "is_setting_line",
    "load_config",
    "natural_key",
    "read_config",
    "read_rotor",
]
