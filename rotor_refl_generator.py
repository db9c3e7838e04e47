# rotor_refl_generator.py
from __future__ import annotations

import argparse
import json
import string
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List, Sequence

from alphabet_and_permutation import Alphabet, Permutation
from errors import EnigmaError, MalformedAlphabet
from rotor_and_reflector import Rotor
from settings_generator import build_rng
from utilities import format_config

# ─── helpers ────────────────────────────────────────────────────────────


def make_rotor(alpha: str, rng: Random | SystemRandom) -> str:
    """Return a random permutation of *alpha*."""
    chars = list(alpha)
    rng.shuffle(chars)
    return "".join(chars)


def make_reflector(alpha: str, rng: Random | SystemRandom) -> str:
    """Return an involutory reflector wiring for *alpha* (no self-maps)."""
    if len(alpha) % 2:
        raise MalformedAlphabet(
            f"A reflector needs an even alphabet, this one has {len(alpha)} symbols"
        )
    remaining = list(alpha)
    rng.shuffle(remaining)
    wiring = [""] * len(alpha)

    while remaining:
        a, b = remaining.pop(), remaining.pop()
        ia, ib = alpha.index(a), alpha.index(b)
        wiring[ia], wiring[ib] = b, a

    return "".join(wiring)


def make_notches(alpha: str, max_n: int, rng: Random | SystemRandom) -> str:
    """Between one and *max_n* distinct notch symbols, in alphabet order."""
    if max_n <= 0:
        return ""
    picked = set(rng.sample(alpha, rng.randint(1, min(max_n, len(alpha)))))
    return "".join(ch for ch in alpha if ch in picked)


def generate_wheels(
    alphabet: Alphabet,
    n_moving: int,
    n_fixed: int,
    n_reflectors: int,
    max_notches: int,
    rng: Random | SystemRandom,
) -> List[Rotor]:
    alpha = str(alphabet)
    wheels: List[Rotor] = []
    for i in range(1, n_moving + 1):
        perm = Permutation.from_wiring(make_rotor(alpha, rng), alphabet)
        wheels.append(Rotor.moving(f"R{i}", perm, make_notches(alpha, max_notches, rng)))
    for i in range(1, n_fixed + 1):
        perm = Permutation.from_wiring(make_rotor(alpha, rng), alphabet)
        wheels.append(Rotor.fixed(f"F{i}", perm))
    for i in range(n_reflectors):
        perm = Permutation.from_wiring(make_reflector(alpha, rng), alphabet)
        wheels.append(Rotor.reflector(_refl_label(i), perm))
    return wheels


def _refl_label(idx: int) -> str:
    """A, B, …, Z, then U27, U28, …"""
    return string.ascii_uppercase[idx] if idx < 26 else f"U{idx + 1}"


# ─── output formatters ─────────────────────────────────────────────────


def emit_json(wheels: Sequence[Rotor], alphabet: Alphabet, num_rotors: int, num_pawls: int) -> str:
    payload = {
        "alphabet": str(alphabet),
        "num_rotors": num_rotors,
        "num_pawls": num_pawls,
        "rotors": {
            w.name: {"type": w.kind.value, "notches": w.notches, "cycles": w.permutation.cycles()}
            for w in wheels
        },
    }
    return json.dumps(payload, indent=2) + "\n"


# ─── CLI ───────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random machine configuration.")
    p.add_argument(
        "--alphabet",
        default="26",
        help="26, 36 or a literal string of symbols (default 26)",
    )
    p.add_argument("--rotors", type=int, default=5, help="How many moving rotors (default 5)")
    p.add_argument("--fixed", type=int, default=0, help="How many fixed rotors (default 0)")
    p.add_argument("--reflectors", type=int, default=2, help="How many reflectors (default 2)")
    p.add_argument("--notches", type=int, default=2, help="Most notches per moving rotor (default 2)")
    p.add_argument("--slots", type=int, default=4, help="Rotor slots in the machine (default 4)")
    p.add_argument("--pawls", type=int, default=3, help="Pawls in the machine (default 3)")
    p.add_argument(
        "--seed",
        type=int,
        help="Integer seed for deterministic output "
        "(omit for cryptographically strong randomness)",
    )
    p.add_argument(
        "--format",
        choices=["conf", "json"],
        default="conf",
        help="Output format (default conf)",
    )
    p.add_argument(
        "--outfile",
        type=Path,
        help="Write to this file (stdout if omitted)",
    )
    return p.parse_args(argv)


# ─── main ──────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    alpha_map = {
        "26": string.ascii_uppercase,
        "36": string.ascii_uppercase + string.digits,
    }
    try:
        alphabet = Alphabet(alpha_map.get(args.alphabet, args.alphabet))
        rng = build_rng(args.seed)
        wheels = generate_wheels(
            alphabet, args.rotors, args.fixed, args.reflectors, args.notches, rng
        )
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1

    if args.format == "conf":
        text = format_config(alphabet, args.slots, args.pawls, wheels)
    else:
        text = emit_json(wheels, alphabet, args.slots, args.pawls)

    if args.outfile:
        args.outfile.write_text(text, encoding="utf-8")
        print(f"Wrote {args.outfile} ({args.format}, {len(text)} bytes)")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
