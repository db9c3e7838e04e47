"""
Tests for configuration files, setting lines and output grouping.
"""

import pytest

from alphabet_and_permutation import Alphabet, Permutation
from errors import (
    MalformedAlphabet,
    MalformedConfig,
    MalformedPermutation,
    TruncatedConfig,
    UnknownRotor,
)
from rotor_and_reflector import RotorKind
from suites import standard_config, suite_rotors
from utilities import (
    apply_setting_line,
    format_config,
    format_rotor,
    group_blocks,
    is_setting_line,
    load_config,
    natural_key,
    read_config,
)

NAVAL_CONF = """\
ABCDEFGHIJKLMNOPQRSTUVWXYZ
 5 3
 I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
 VI MZM    (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
 VII MZM   (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
 VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
 Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
 Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
 B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
           (RX) (SZ) (TV)
 C R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
           (QZ) (SX) (UY)
"""


class TestReadConfig:

    def test_naval_file(self):
        m = read_config(NAVAL_CONF)
        assert m.num_rotors == 5
        assert m.num_pawls == 3
        assert m.available_rotors() == [
            "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "Beta", "Gamma", "B", "C",
        ]
        assert m.pool_rotor("VI").notches == "MZ"
        assert m.pool_rotor("Beta").kind is RotorKind.FIXED
        assert m.pool_rotor("B").reflecting

    def test_naval_file_matches_wiring_tables(self):
        m = read_config(NAVAL_CONF)
        for rotor in suite_rotors("M4"):
            assert m.pool_rotor(rotor.name).permutation == rotor.permutation
            assert m.pool_rotor(rotor.name).kind is rotor.kind

    def test_standard_config_round_trip(self):
        m = read_config(standard_config())
        assert m.num_rotors == 4
        assert m.num_pawls == 3
        for rotor in suite_rotors("Legacy"):
            loaded = m.pool_rotor(rotor.name)
            assert loaded.permutation == rotor.permutation
            assert loaded.notches == rotor.notches

    def test_tiny_config(self):
        m = read_config("ABCD 2 1\nR R (AB) (CD)\nM MA (ABCD)\n")
        apply_setting_line(m, "* R M A")
        assert m.convert("AAAA") != "AAAA"

    def test_load_config(self, tmp_path):
        path = tmp_path / "naval.conf"
        path.write_text(NAVAL_CONF, encoding="utf-8")
        assert load_config(path).num_rotors == 5

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(MalformedConfig, match="could not open"):
            load_config(tmp_path / "nope.conf")

    def test_load_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.conf"
        path.write_bytes(b"AB\xffC 2 1\n")
        with pytest.raises(MalformedConfig, match="not valid UTF-8"):
            load_config(path)


class TestConfigErrors:

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "ABCD",
            "ABCD 3",
            "ABCD 3 2\nI",
        ],
    )
    def test_truncated(self, text):
        with pytest.raises(TruncatedConfig):
            read_config(text)

    @pytest.mark.parametrize(
        "text",
        [
            "ABCD x 2",
            "ABCD 3 y",
            "ABCD 3 2\nI Q (AB)",
            "ABCD 3 2\nI MA",
            "ABCD 3 2\nI MA\nII MB (AB)",
            "ABCD 3 2\nX NA (AB)",
            "ABCD 3 2\nX RA (AB) (CD)",
            "ABCD 3 2\nI MZ (AB)",
            "ABCD 3 2\n(AB) MA (AB)",
            "ABCD 1 0\nR R (AB) (CD)",
            "ABCD 3 2\nI MA (AB)\nI MB (CD)",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedConfig):
            read_config(text)

    @pytest.mark.parametrize(
        "text",
        [
            "ABCD 3 2\nI MA (AB",
            "ABCD 3 2\nI MA (AE)",
            "ABCD 3 2\nI MA (AB) (BC)",
            "ABCD 3 2\nR R (AB)",
        ],
    )
    def test_bad_wiring(self, text):
        with pytest.raises(MalformedPermutation):
            read_config(text)

    def test_bad_alphabet(self):
        with pytest.raises(MalformedAlphabet):
            read_config("AABC 3 2")


class TestSettingLines:

    def test_is_setting_line(self):
        assert is_setting_line("* B I II III AAA")
        assert is_setting_line("*B I II III AAA")
        assert not is_setting_line("HELLO * WORLD")

    def test_indented_star_is_a_message(self):
        assert not is_setting_line("  * B I II III AAA")
        assert not is_setting_line("\t*B I II III AAA")

    def test_star_may_touch_the_first_name(self, legacy):
        apply_setting_line(legacy, "*B I II III QRS (AB)")
        assert legacy.rotor(0).name == "B"
        assert legacy.window() == "QRS"
        assert legacy.plugboard == Permutation("(AB)", legacy.alphabet)

    def test_plugboard_spread_over_tokens(self, legacy):
        apply_setting_line(legacy, "* B I II III AAA (AB)(CD) (EF)")
        assert legacy.plugboard.cycles() == "(AB) (CD) (EF)"

    def test_too_short(self, legacy):
        with pytest.raises(MalformedConfig):
            apply_setting_line(legacy, "* B I II III")

    def test_not_a_setting_line(self, legacy):
        with pytest.raises(MalformedConfig):
            apply_setting_line(legacy, "B I II III AAA")

    def test_rotor_names_are_checked(self, legacy):
        with pytest.raises(UnknownRotor):
            apply_setting_line(legacy, "* B I II AAA (AB)")

    def test_bad_plugboard_leaves_machine_alone(self, legacy):
        apply_setting_line(legacy, "* B I II III AAA")
        with pytest.raises(MalformedPermutation):
            apply_setting_line(legacy, "* C IV V VI ZZZ (ABC)")
        assert legacy.rotor(0).name == "B"
        assert legacy.window() == "AAA"


class TestFormatting:

    def test_group_blocks(self):
        assert group_blocks("ABCDEFGHIJKLMNOPQRSTUVW") == "ABCDE FGHIJ KLMNO PQRST UVW"
        assert group_blocks("ABCDEFGHIJ") == "ABCDE FGHIJ"
        assert group_blocks("ABC") == "ABC"
        assert group_blocks("") == ""
        assert group_blocks("ABCDEFG", block=3) == "ABC DEF G"

    def test_format_rotor(self):
        m = read_config(NAVAL_CONF)
        assert format_rotor(m.pool_rotor("Beta")).split() == [
            "Beta", "N", "(ALBEVFCYODJWUGNMQTZSKPR)", "(HIX)",
        ]
        assert format_rotor(m.pool_rotor("VI")).split()[1] == "MMZ"

    def test_identity_rotor_still_has_wiring(self):
        m = read_config("ABCD 2 1\nR R (AB) (CD)\nM MA (A)\n")
        text = format_config(
            Alphabet("ABCD"), 2, 1, [m.pool_rotor("R"), m.pool_rotor("M")]
        )
        again = read_config(text)
        assert again.pool_rotor("M").permutation == m.pool_rotor("M").permutation

    def test_natural_key(self):
        names = ["R10", "R2", "R1", "Beta", "S3"]
        assert sorted(names, key=natural_key) == ["R1", "R2", "R10", "S3", "Beta"]
