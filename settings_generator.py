# settings_generator.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List, Sequence

from errors import EnigmaError, MalformedConfig
from machine import Machine
from utilities import load_config, natural_key

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    max_possible = len(alpha) // 2
    k = min(k, max_possible)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def random_setting_line(machine: Machine, rng: Random | SystemRandom, pairs: int = 10) -> str:
    """Draw a setting line that *machine* will accept."""
    names = sorted(machine.available_rotors(), key=natural_key)
    pool = [machine.pool_rotor(name) for name in names]

    reflectors = [r.name for r in pool if r.reflecting]
    fixed = [r.name for r in pool if not r.reflecting and not r.rotates]
    moving = [r.name for r in pool if r.rotates]
    n_fixed = machine.num_rotors - 1 - machine.num_pawls

    if not reflectors or len(fixed) < n_fixed or len(moving) < machine.num_pawls:
        raise MalformedConfig("Rotor pool is too small to fill every slot")

    chosen = [rng.choice(reflectors)]
    chosen += rng.sample(fixed, n_fixed)
    chosen += rng.sample(moving, machine.num_pawls)

    alpha = str(machine.alphabet)
    window = "".join(rng.choices(alpha, k=machine.num_rotors - 1))
    plugs = " ".join(f"({p})" for p in choose_pairs(alpha, pairs, rng))

    return " ".join(part for part in ["*", *chosen, window, plugs] if part)


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate random setting lines for a machine configuration")
    p.add_argument("config", type=Path, help="Machine configuration file")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=10, help="Plugboard pairs per line (default: 10)")
    p.add_argument("--count", type=int, default=1, help="How many setting lines (default: 1)")
    p.add_argument(
        "--outfile",
        type=Path,
        help="Destination file (stdout if omitted)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_cli(argv)
    rng = build_rng(args.seed)

    try:
        machine = load_config(args.config)
        lines = [random_setting_line(machine, rng, args.pairs) for _ in range(args.count)]
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1

    text = "\n".join(lines) + "\n"
    if args.outfile:
        args.outfile.write_text(text, encoding="utf-8")
        print(f"✅  Wrote {args.outfile} ({len(lines)} setting lines)")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
