# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from copy import copy

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    BadSettingLength,
    DuplicateRotor,
    EnigmaError,
    MalformedConfig,
    MalformedPermutation,
    MisplacedReflector,
    PawlMismatch,
    UnknownRotor,
)
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A complete rotor machine.

    Slot 0 holds the reflector and slot ``num_rotors - 1`` the fast rotor.
    The pool handed to the constructor is never modified: inserted rotors
    are copies that share their wiring with the pool but own their position.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise MalformedConfig(f"Need at least 2 rotor slots, got {num_rotors}")
        if not (0 <= num_pawls < num_rotors):
            raise MalformedConfig(
                f"Pawl count {num_pawls} must lie in 0..{num_rotors - 1}"
            )

        pool: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in pool:
                raise MalformedConfig(f"Rotor {rotor.name} defined twice")
            if rotor.alphabet != alphabet:
                raise MalformedConfig(f"Rotor {rotor.name} uses a different alphabet")
            pool[rotor.name] = rotor

        self.alphabet: Alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls
        self._pool = pool
        self._slots: list[Rotor] = []
        self._plugboard = Permutation("", alphabet)

    # ── shape ────────────────────────────────────────────────────

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        """Number of pawls, and so of moving rotors, in every assembly."""
        return self._num_pawls

    def available_rotors(self) -> list[str]:
        return list(self._pool)

    def pool_rotor(self, name: str) -> Rotor:
        try:
            return self._pool[name]
        except KeyError:
            raise UnknownRotor(f"No rotor named {name!r}") from None

    def rotor(self, k: int) -> Rotor:
        """Return the rotor in slot *k* (0 is the reflector)."""
        if not self._slots:
            raise MalformedConfig("No rotors inserted yet")
        return self._slots[k]

    # ── assembly ─────────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with copies of the pool rotors called *names*.

        ``names[0]`` must be a reflector and the last ``num_pawls`` names
        moving rotors. Every rotor starts at setting 0.
        """
        if len(names) != self._num_rotors:
            raise MalformedConfig(
                f"Expected {self._num_rotors} rotors, got {len(names)}"
            )

        chosen: list[Rotor] = []
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise DuplicateRotor(f"Rotor {name} selected more than once")
            seen.add(name)
            rotor = copy(self.pool_rotor(name))
            rotor.set(0)
            chosen.append(rotor)

        if not chosen[0].reflecting:
            raise MisplacedReflector(f"Rotor {chosen[0].name} in slot 0 is not a reflector")
        for rotor in chosen[1:]:
            if rotor.reflecting:
                raise MisplacedReflector(f"Reflector {rotor.name} is only allowed in slot 0")

        moving = sum(rotor.rotates for rotor in chosen)
        if moving != self._num_pawls:
            raise PawlMismatch(
                f"{moving} moving rotors selected but the machine has "
                f"{self._num_pawls} pawls"
            )
        first_moving = self._num_rotors - self._num_pawls
        for slot, rotor in enumerate(chosen):
            if rotor.rotates != (slot >= first_moving):
                raise PawlMismatch(
                    f"Rotor {rotor.name} in slot {slot}: moving rotors must "
                    f"fill exactly the rightmost {self._num_pawls} slots"
                )

        self._slots = chosen
        debug.log("config", "inserted %s", " ".join(names))

    def set_rotors(self, setting: str) -> None:
        """Set slots 1.. to the symbols of *setting*, leftmost first."""
        if not self._slots:
            raise MalformedConfig("No rotors inserted yet")
        if len(setting) != self._num_rotors - 1:
            raise BadSettingLength(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        positions = [self.alphabet.to_index(ch) for ch in setting]

        self._slots[0].set(0)
        for rotor, posn in zip(self._slots[1:], positions):
            rotor.set(posn)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self.alphabet:
            raise MalformedPermutation("Plugboard uses a different alphabet")
        if not plugboard.is_involution():
            raise MalformedPermutation(
                f"Plugboard {plugboard.cycles()} must consist of pairs only"
            )
        self._plugboard = plugboard
        debug.log("plugboard", "set %s", plugboard.cycles() or "identity")

    def configure(self, names: Sequence[str], setting: str, plugboard: Permutation) -> None:
        """insert_rotors, set_rotors and set_plugboard as one all-or-nothing step."""
        saved = (self._slots, self._plugboard)
        try:
            self.insert_rotors(names)
            self.set_rotors(setting)
            self.set_plugboard(plugboard)
        except EnigmaError:
            self._slots, self._plugboard = saved
            raise

    def window(self) -> str:
        """Symbols currently showing for slots 1.. (the reflector is not shown)."""
        return "".join(
            self.alphabet.to_symbol(rotor.setting) for rotor in self._slots[1:]
        )

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance rotors one key-press, double-stepping included."""
        slots = self._slots
        last = len(slots) - 1

        # every decision uses the positions before anything moves
        marks = [False] * len(slots)
        marks[last] = True
        for i in range(last - 1, 0, -1):
            if not slots[i].rotates:
                continue
            ratchet = slots[i + 1].at_notch()
            double = slots[i].at_notch() and slots[i - 1].rotates
            marks[i] = ratchet or double

        for rotor, mark in zip(slots, marks):
            if mark:
                rotor.advance()

    # ── encipher one symbol  ────────────────────────────────────

    def convert_index(self, c: int) -> int:
        """Advance the machine, then return the image of index *c*."""
        if not self._slots:
            raise MalformedConfig("No rotors inserted yet")
        self.alphabet.to_symbol(c)          # range check

        self._advance_rotors()
        tracing = debug.active("encipher")
        if debug.active("stepping"):
            debug.log("stepping", "window %s", self.window())

        trail = [c]
        signal = self._plugboard.permute(c)
        trail.append(signal)

        for rotor in reversed(self._slots[1:]):
            signal = rotor.convert_forward(signal)
        signal = self._slots[0].convert_forward(signal)
        for rotor in self._slots[1:]:
            signal = rotor.convert_backward(signal)
        trail.append(signal)

        signal = self._plugboard.permute(signal)
        trail.append(signal)

        if debug.active("plugboard"):
            debug.log("plugboard", "%s -> %s, %s -> %s",
                      *(self.alphabet.to_symbol(i) for i in trail))
        if tracing:
            debug.log("encipher", "[%s] %s", self.window(),
                      " -> ".join(self.alphabet.to_symbol(i) for i in trail))
        return signal

    def convert(self, msg: str) -> str:
        """Encipher *msg* with all whitespace removed.

        Every symbol is checked before the first key-press, so a message
        holding a foreign symbol fails without moving any rotor.
        """
        text = "".join(msg.split())
        signals = [self.alphabet.to_index(ch) for ch in text]
        return "".join(
            self.alphabet.to_symbol(self.convert_index(c)) for c in signals
        )

    def __repr__(self) -> str:
        names = " ".join(rotor.name for rotor in self._slots) or "empty"
        return f"<Machine {names} window={self.window() or '-'}>"


__all__ = ["Machine"]
