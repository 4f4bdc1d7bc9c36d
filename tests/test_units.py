"""Tests for units of measure."""

import pytest

from check_proc_mem.errors import ConfigurationError
from check_proc_mem.report import format_value
from check_proc_mem.units import convert, is_bits, validate_unit


class TestUnits:
    """Tests for unit validation and conversion."""

    @pytest.mark.parametrize(
        "unit", ["B", "KB", "KIB", "MB", "MIB", "GB", "GIB", "TB", "TIB", "kb", "Mb"]
    )
    def test_known_units(self, unit):
        """Test every documented unit validates."""
        validate_unit(unit)

    @pytest.mark.parametrize("unit", ["", "PB", "K", "bytes", "KBB"])
    def test_unknown_units(self, unit):
        """Test units outside the table are rejected."""
        with pytest.raises(ConfigurationError, match="unknown unit of measure"):
            validate_unit(unit)

    def test_bits_looks_at_last_character_only(self):
        """Test only a trailing lower-case b means bits."""
        assert is_bits("Mb")
        assert is_bits("kb")
        assert is_bits("b")
        assert not is_bits("MB")
        assert not is_bits("kB")
        assert not is_bits("bB")

    def test_binary_scale(self):
        """Test KB and KiB are both 1024 bytes."""
        assert convert(1, 4096, "KB") == 4
        assert convert(1, 4096, "KiB") == 4
        assert convert(1, 4096, "KIB") == 4
        assert convert(256, 4096, "MB") == 1
        assert convert(262144, 4096, "GiB") == 1

    def test_kibibits(self):
        """Test a lower-case "kib" means kibibits."""
        assert convert(1, 4096, "kib") == 32

    @pytest.mark.parametrize("unit", ["Bb", "bB"])
    def test_doubled_byte_suffix_rejected(self, unit):
        """Test "Bb" is not a unit even though it ends in a lower-case b."""
        with pytest.raises(ConfigurationError, match=f"unknown unit of measure: {unit}"):
            validate_unit(unit)

    def test_megabits(self):
        """Test 1 MiB of resident memory is 8 megabits."""
        assert convert(256, 4096, "Mb") == 8
        assert format_value(convert(256, 4096, "Mb")) == "8"

    def test_bit_multiplier_can_be_skipped(self):
        """Test bits=False keeps the byte scale."""
        assert convert(256, 4096, "Mb", bits=False) == 1

    def test_bytes_round_trip(self):
        """Test pages converted to bytes divide back to the page count."""
        for pages in (0, 1, 7, 4096, 123456789):
            assert convert(pages, 4096, "B") / 4096 == pages
