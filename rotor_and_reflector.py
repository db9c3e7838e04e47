# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import MalformedConfig, MalformedPermutation

debug = Debug()


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"


class Rotor:
    """One wheel of the machine.

    A single class tagged with a :class:`RotorKind` covers moving rotors,
    fixed rotors and reflectors; only moving rotors carry notches and only
    they advance. Build them with :meth:`moving`, :meth:`fixed` or
    :meth:`reflector`.
    """

    __slots__ = ("name", "permutation", "kind", "_notches", "_setting")

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: RotorKind,
        notches: str = "",
    ) -> None:
        if notches and kind is not RotorKind.MOVING:
            raise MalformedConfig(f"Rotor {name}: only moving rotors have notches")
        bad = [ch for ch in notches if ch not in permutation.alphabet]
        if bad:
            raise MalformedConfig(
                f"Rotor {name}: notch {bad[0]!r} is not in the alphabet"
            )
        if kind is RotorKind.REFLECTOR and not (
            permutation.is_involution() and permutation.derangement()
        ):
            raise MalformedPermutation(
                f"Reflector {name} must pair every symbol with another one"
            )

        self.name: str = name
        self.permutation: Permutation = permutation
        self.kind: RotorKind = kind
        self._notches: frozenset[int] = frozenset(
            permutation.alphabet.to_index(ch) for ch in notches
        )
        self._setting: int = 0

    # ── variant constructors ─────────────────────────────────────
    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str = "") -> "Rotor":
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.REFLECTOR)

    # ── descriptive state ────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size

    @property
    def notches(self) -> str:
        return "".join(
            self.alphabet.to_symbol(i) for i in sorted(self._notches)
        )

    @property
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    @property
    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    # ── position ─────────────────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._setting

    def set(self, posn: int | str) -> None:
        """Move to *posn*, an index (wrapped modulo N) or a window symbol."""
        if isinstance(posn, str):
            self._setting = self.alphabet.to_index(posn)
        else:
            self._setting = self.permutation.wrap(posn)

    def at_notch(self) -> bool:
        return self.kind is RotorKind.MOVING and self._setting in self._notches

    def advance(self) -> None:
        if self.kind is not RotorKind.MOVING:
            return
        self._setting = (self._setting + 1) % self.size
        debug.log("rotor", "%s advanced to %s", self.name,
                  self.alphabet.to_symbol(self._setting))

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        shift = (p + self._setting) % self.size
        mapped = self.permutation.permute(shift)
        return (mapped - self._setting) % self.size

    def convert_backward(self, e: int) -> int:
        shift = (e + self._setting) % self.size
        mapped = self.permutation.invert(shift)
        return (mapped - self._setting) % self.size

    # ── niceties ─────────────────────────────────────────────────
    def __copy__(self) -> "Rotor":
        clone = object.__new__(Rotor)
        clone.name = self.name
        clone.permutation = self.permutation
        clone.kind = self.kind
        clone._notches = self._notches
        clone._setting = self._setting
        return clone

    def __repr__(self) -> str:
        return (
            f"<Rotor {self.name} {self.kind.name.lower()} "
            f"pos={self.alphabet.to_symbol(self._setting)}>"
        )


__all__ = ["Rotor", "RotorKind"]
