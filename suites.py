from __future__ import annotations

from typing import Dict, Tuple

from alphabet_and_permutation import Alphabet, Permutation
from rotor_and_reflector import Rotor
from utilities import format_config

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Historical wheels as wiring strings: wiring[i] is the image of Alpha26[i].
# Notches are the window letters at which the wheel drags its left neighbour.
ROTOR_WIRINGS: Dict[str, Tuple[str, str]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
}

# non-moving fourth wheels of the naval machine
FIXED_WIRINGS: Dict[str, str] = {
    "Beta":  "LEYJVCNIXWPBQMDRTAKZGFUHOS",
    "Gamma": "FSOKANUERHMBTIYCWLQPZXVGJD",
}

WIDE_REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

THIN_REFLECTORS: Dict[str, str] = {
    "B": "ENKQAUYWJICOPBLMDXZVFTHRGS",
    "C": "RDOBJNTKVEHMLFCWZAXGYIPSUQ",
}

SUITES: Dict[str, Dict] = {
    "Legacy": {             # three-rotor army machine
        "num_rotors": 4,
        "num_pawls": 3,
        "fixed": {},
        "reflectors": WIDE_REFLECTORS,
    },
    "M4": {                 # four-rotor naval machine
        "num_rotors": 5,
        "num_pawls": 3,
        "fixed": FIXED_WIRINGS,
        "reflectors": THIN_REFLECTORS,
    },
}


def suite_rotors(suite: str = "Legacy") -> list[Rotor]:
    """Return fresh Rotor objects for every wheel of *suite*."""
    try:
        suite_def = SUITES[suite]
    except KeyError:
        raise ValueError(f"Unknown suite '{suite}'. Expected one of {list(SUITES)}") from None

    alphabet = Alphabet(Alpha26)
    rotors = [
        Rotor.moving(name, Permutation.from_wiring(wiring, alphabet), notches)
        for name, (wiring, notches) in ROTOR_WIRINGS.items()
    ]
    rotors += [
        Rotor.fixed(name, Permutation.from_wiring(wiring, alphabet))
        for name, wiring in suite_def["fixed"].items()
    ]
    rotors += [
        Rotor.reflector(name, Permutation.from_wiring(wiring, alphabet))
        for name, wiring in suite_def["reflectors"].items()
    ]
    return rotors


def standard_config(suite: str = "Legacy") -> str:
    """Configuration-file text describing the wheels of *suite*."""
    rotors = suite_rotors(suite)
    suite_def = SUITES[suite]
    return format_config(Alphabet(Alpha26), suite_def["num_rotors"], suite_def["num_pawls"], rotors)


__all__ = ["Alpha26", "SUITES", "standard_config", "suite_rotors"]
