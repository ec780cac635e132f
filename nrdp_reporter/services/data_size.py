import re
from typing import Union

Number = Union[int, float]

# Same shape the flow engine accepts for data-size properties, e.g. "10 MB"
_DATA_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(B|KB|MB|GB|TB)\s*$", re.IGNORECASE)

_BYTES_IN_KILOBYTE = 1024
_BYTES_IN_MEGABYTE = _BYTES_IN_KILOBYTE * 1024
_BYTES_IN_GIGABYTE = _BYTES_IN_MEGABYTE * 1024
_BYTES_IN_TERABYTE = _BYTES_IN_GIGABYTE * 1024

_UNIT_MULTIPLIERS = {
    "B": 1,
    "KB": _BYTES_IN_KILOBYTE,
    "MB": _BYTES_IN_MEGABYTE,
    "GB": _BYTES_IN_GIGABYTE,
    "TB": _BYTES_IN_TERABYTE,
}


def parse_data_size(raw: str) -> float:
    """
    Parse a data-size string such as "512 KB" or "1.5GB" into bytes.

    Units are binary multiples (1 KB = 1024 B). Raises ValueError if the
    string does not match.
    """
    match = _DATA_SIZE_PATTERN.match(raw)
    if not match:
        raise ValueError(
            f"{raw!r} is not a valid data size; expected e.g. '10 MB' "
            "(units B, KB, MB, GB, TB)"
        )

    value = float(match.group(1))
    return value * _UNIT_MULTIPLIERS[match.group(2).upper()]


def _format_decimal(value: float) -> str:
    # at most two fraction digits, thousands grouping, no trailing zeros
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return text


def format_data_size(size: Number) -> str:
    """Render a byte count the way the flow engine shows it, e.g. '12.4 MB'."""
    for divisor, unit in (
        (_BYTES_IN_TERABYTE, "TB"),
        (_BYTES_IN_GIGABYTE, "GB"),
        (_BYTES_IN_MEGABYTE, "MB"),
        (_BYTES_IN_KILOBYTE, "KB"),
    ):
        scaled = size / divisor
        if scaled > 1:
            return f"{_format_decimal(scaled)} {unit}"

    return f"{_format_decimal(size)} bytes"
