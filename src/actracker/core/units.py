from typing import Optional, Union

KB_IN_BYTES = 1024
MB_IN_BYTES = 1024 * KB_IN_BYTES
GB_IN_BYTES = 1024 * MB_IN_BYTES
TB_IN_BYTES = 1024 * GB_IN_BYTES

# Unit ladder: a unit applies its own factor plus every factor below it.
_LADDER = "PTGMK"

Number = Union[int, float]


def let_to_num(size: Union[str, int]) -> Number:
    """
    Transforms php.ini shorthand ('2M', '512k', '1G') into a byte count.
    Without a recognized unit letter the value is returned unchanged.
    """
    text = str(size).strip()
    if not text:
        raise ValueError("Empty size string")

    unit = text[-1].upper()
    if unit in _LADDER:
        ret = _to_number(text[:-1])
        for _ in _LADDER[_LADDER.index(unit):]:
            ret *= 1024
        return ret

    return _to_number(text)


def _to_number(text: str) -> Number:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def size_format(num_bytes: Optional[Number], decimals: int = 0) -> Optional[str]:
    """Converts a byte count to the largest whole unit, e.g. 2097152 -> '2 MB'."""
    try:
        num_bytes = float(num_bytes)
    except (TypeError, ValueError):
        return None
    if num_bytes < 0:
        return None

    for unit, mag in (("TB", TB_IN_BYTES), ("GB", GB_IN_BYTES), ("MB", MB_IN_BYTES), ("KB", KB_IN_BYTES)):
        if num_bytes >= mag:
            return f"{num_bytes / mag:,.{decimals}f} {unit}"
    return f"{num_bytes:,.{decimals}f} B"
