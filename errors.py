# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every failure the simulator reports to the operator."""


# ── construction ─────────────────────────────────────────────────
class MalformedAlphabet(EnigmaError):
    pass


class MalformedPermutation(EnigmaError):
    pass


class MalformedConfig(EnigmaError):
    pass


class TruncatedConfig(EnigmaError):
    pass


# ── machine assembly ─────────────────────────────────────────────
class UnknownRotor(EnigmaError):
    pass


class DuplicateRotor(EnigmaError):
    pass


class MisplacedReflector(EnigmaError):
    pass


class PawlMismatch(EnigmaError):
    pass


class BadSettingLength(EnigmaError):
    pass


# ── per-operation ────────────────────────────────────────────────
class UnknownSymbol(EnigmaError):
    pass


class IndexOutOfRange(EnigmaError, IndexError):
    pass


# ── driver ───────────────────────────────────────────────────────
class MissingSettingLine(EnigmaError):
    pass


__all__ = [
    "EnigmaError",
    "MalformedAlphabet",
    "MalformedPermutation",
    "MalformedConfig",
    "TruncatedConfig",
    "UnknownRotor",
    "DuplicateRotor",
    "MisplacedReflector",
    "PawlMismatch",
    "BadSettingLength",
    "UnknownSymbol",
    "IndexOutOfRange",
    "MissingSettingLine",
]
