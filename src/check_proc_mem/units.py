"""Units of measure for memory values."""

from check_proc_mem.errors import ConfigurationError

# Binary multiples; kB and KB both mean 1024 bytes here
UNIT_SCALE: dict[str, float] = {
    "B": 1,
    "KB": 1 / 1024,
    "KIB": 1 / 1024,
    "MB": 1 / 1024**2,
    "MIB": 1 / 1024**2,
    "GB": 1 / 1024**3,
    "GIB": 1 / 1024**3,
    "TB": 1 / 1024**4,
    "TIB": 1 / 1024**4,
}


def validate_unit(unit: str) -> None:
    """Raise ConfigurationError for a unit outside UNIT_SCALE."""
    if unit.upper() not in UNIT_SCALE:
        raise ConfigurationError(f"unknown unit of measure: {unit}")


def is_bits(unit: str) -> bool:
    """Check if the unit asks for bits: only its last character is looked at."""
    return unit[-1:] == "b"


def convert(pages: int, page_size: int, unit: str, bits: bool = True) -> float:
    """
    Convert a page count to the requested unit.

    Args:
        pages: Number of memory pages.
        page_size: Bytes per page.
        unit: Unit string, case-insensitive apart from a trailing "b".
        bits: Apply the x8 bit multiplier when the unit ends in "b".
    """
    value = pages * page_size * UNIT_SCALE[unit.upper()]
    if bits and is_bits(unit):
        value *= 8
    return value
