"""
Pytest configuration for the rotor machine tests.

This file ensures the project root is in sys.path for all tests and
provides ready-built machines for the historical wheel sets.
"""

import os
import sys

import pytest

# Add project root to sys.path for imports
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from alphabet_and_permutation import Alphabet  # noqa: E402
from debug import Debug  # noqa: E402
from machine import Machine  # noqa: E402
from suites import Alpha26, SUITES, suite_rotors  # noqa: E402

UPPER = Alphabet(Alpha26)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Every test starts and ends with all trace components switched off."""
    dbg = Debug()
    dbg.disable(*dbg.status())
    yield dbg
    dbg.disable(*dbg.status())
    dbg.toggle_global(True)


def _build(suite):
    suite_def = SUITES[suite]
    return Machine(UPPER, suite_def["num_rotors"], suite_def["num_pawls"], suite_rotors(suite))


@pytest.fixture
def legacy():
    """Three-rotor machine: reflector + three moving rotors."""
    return _build("Legacy")


@pytest.fixture
def m4():
    """Naval machine: thin reflector, fixed fourth wheel, three moving rotors."""
    return _build("M4")
