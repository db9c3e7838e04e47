# alphabet_and_permutation.py
from __future__ import annotations

from collections.abc import Iterator

from debug import Debug
from errors import (
    IndexOutOfRange,
    MalformedAlphabet,
    MalformedPermutation,
    UnknownSymbol,
)

debug = Debug()

# characters the cycle notation and the setting lines reserve for themselves
RESERVED = frozenset("()*")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """An ordered set of distinct one-character symbols indexed 0..N-1."""

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: str) -> None:
        if not symbols:
            raise MalformedAlphabet("Alphabet must contain at least one symbol")
        index: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch.isspace():
                raise MalformedAlphabet("Alphabet may not contain whitespace")
            if ch in RESERVED:
                raise MalformedAlphabet(f"Alphabet may not contain {ch!r}")
            if ch in index:
                raise MalformedAlphabet(f"Duplicate symbol {ch!r} in alphabet")
            index[ch] = i

        self._symbols: str = symbols
        self._index: dict[str, int] = index
        debug.log("alphabet", "built %d symbols %s", len(symbols), symbols)

    @property
    def size(self) -> int:
        return len(self._symbols)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # symbol → integer signal
    def to_index(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise UnknownSymbol(
                f"Invalid character {ch!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self._symbols)):
            hi = len(self._symbols) - 1
            raise IndexOutOfRange(f"Signal {index} out of range 0–{hi}")
        return self._symbols[index]

    # ── niceties ────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __str__(self) -> str:
        return self._symbols

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"


def _as_alphabet(alphabet: Alphabet | str) -> Alphabet:
    return alphabet if isinstance(alphabet, Alphabet) else Alphabet(alphabet)


def _parse_cycles(text: str, alphabet: Alphabet) -> list[str]:
    """Split cycle notation into its cycles, rejecting anything ill-formed."""
    cycles: list[str] = []
    current: list[str] | None = None
    seen: set[str] = set()

    for ch in text:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise MalformedPermutation(f"Nested '(' in cycles {text!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise MalformedPermutation(f"Unmatched ')' in cycles {text!r}")
            if not current:
                raise MalformedPermutation(f"Empty cycle in {text!r}")
            cycles.append("".join(current))
            current = None
        else:
            if current is None:
                raise MalformedPermutation(
                    f"Symbol {ch!r} outside parentheses in {text!r}"
                )
            if ch not in alphabet:
                raise MalformedPermutation(f"Symbol {ch!r} not in alphabet")
            if ch in seen:
                raise MalformedPermutation(f"Symbol {ch!r} used in more than one place")
            seen.add(ch)
            current.append(ch)

    if current is not None:
        raise MalformedPermutation(f"Unmatched '(' in cycles {text!r}")
    return cycles


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A bijection on the indices of an alphabet, given in cycle notation.

    ``Permutation("(ACG) (BD)", "ABCDEFG")`` sends A→C, C→G, G→A, B↔D and
    leaves every unlisted symbol where it is. Forward and inverse lookup
    tables are built once, so ``permute``/``invert`` are plain indexing.
    """

    __slots__ = ("alphabet", "_fwd", "_rev")

    def __init__(self, cycles: str, alphabet: Alphabet | str) -> None:
        self.alphabet: Alphabet = _as_alphabet(alphabet)
        size = self.alphabet.size

        fwd = list(range(size))
        rev = list(range(size))
        for cycle in _parse_cycles(cycles, self.alphabet):
            idx = [self.alphabet.to_index(ch) for ch in cycle]
            for a, b in zip(idx, idx[1:] + idx[:1]):
                fwd[a] = b
                rev[b] = a

        self._fwd: tuple[int, ...] = tuple(fwd)
        self._rev: tuple[int, ...] = tuple(rev)
        if debug.active("permutation"):
            debug.log("permutation", "built %s", self.cycles() or "identity")

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet | str) -> "Permutation":
        """Build from a wiring string where ``wiring[i]`` is the image of symbol *i*."""
        alphabet = _as_alphabet(alphabet)
        if sorted(wiring) != sorted(alphabet):
            raise MalformedPermutation("wiring must be a permutation of alphabet")

        fwd = [alphabet.to_index(ch) for ch in wiring]
        return cls(_cycles_of(fwd, alphabet), alphabet)

    @property
    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        """Return *p* reduced to 0..size-1 (Python's % is already non-negative)."""
        return p % self.size

    # ── index mappings ──────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol mappings ─────────────────────────────────────────
    def permute_symbol(self, ch: str) -> str:
        return self.alphabet.to_symbol(self.permute(self.alphabet.to_index(ch)))

    def invert_symbol(self, ch: str) -> str:
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(ch)))

    # ── properties of the whole mapping ─────────────────────────
    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    def is_involution(self) -> bool:
        """True iff applying the permutation twice is the identity."""
        return self._fwd == self._rev

    def cycles(self) -> str:
        """Canonical cycle notation, non-trivial cycles only."""
        return _cycles_of(self._fwd, self.alphabet)

    # ── niceties ────────────────────────────────────────────────
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self.alphabet == other.alphabet and self._fwd == other._fwd

    def __hash__(self) -> int:
        return hash((self.alphabet, self._fwd))

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"


def _cycles_of(fwd: list[int] | tuple[int, ...], alphabet: Alphabet) -> str:
    seen = [False] * len(fwd)
    groups: list[str] = []
    for start in range(len(fwd)):
        if seen[start] or fwd[start] == start:
            continue
        members = []
        i = start
        while not seen[i]:
            seen[i] = True
            members.append(alphabet.to_symbol(i))
            i = fwd[i]
        groups.append("(" + "".join(members) + ")")
    return " ".join(groups)


__all__ = ["Alphabet", "Permutation", "RESERVED"]
