"""Reading champion files and choosing champion numbers."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Champion, CorewarError
from .op import (
    CHAMP_MAX_SIZE,
    COMMENT_LENGTH,
    COMMENT_OFFSET,
    COREWAR_EXEC_MAGIC,
    HEADER_SIZE,
    PROG_NAME_LENGTH,
    PROG_NAME_OFFSET,
    PROG_SIZE_OFFSET,
)


def _c_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def parse_champion_bytes(data: bytes) -> tuple[str, str, bytes]:
    """Parse a compiled champion into its name, comment and code."""
    if len(data) < HEADER_SIZE:
        raise CorewarError("Error: invalid champion file.")
    magic = int.from_bytes(data[0:4], "big", signed=True)
    if magic != COREWAR_EXEC_MAGIC:
        raise CorewarError("Error: invalid magic number.")
    prog_size = int.from_bytes(
        data[PROG_SIZE_OFFSET:PROG_SIZE_OFFSET + 4], "big", signed=True)
    if prog_size <= 0 or prog_size > CHAMP_MAX_SIZE:
        raise CorewarError("Error: invalid program size.")
    name = _c_string(data[PROG_NAME_OFFSET:PROG_NAME_OFFSET + PROG_NAME_LENGTH])
    comment = _c_string(data[COMMENT_OFFSET:COMMENT_OFFSET + COMMENT_LENGTH])
    code = bytes(data[HEADER_SIZE:HEADER_SIZE + prog_size])
    if len(code) != prog_size:
        raise CorewarError("Error: invalid champion file.")
    return name, comment, code


def read_champion_file(champion: Champion) -> Champion:
    """Load the champion's file and fill in its size, name, comment and code."""
    try:
        with open(champion.filename, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise CorewarError("Error: cannot open champion file.") from exc
    name, comment, code = parse_champion_bytes(data)
    champion.size = len(code)
    champion.name = name
    champion.comment = comment
    champion.code = code
    return champion


def is_number_used(number: int, champions: Iterable[Champion]) -> bool:
    """Whether a champion already carries this number."""
    return any(champion.number == number for champion in champions)


def find_available_number(next_number: int, champions: Iterable[Champion]) -> int:
    """Smallest number from next_number upwards that no champion uses."""
    used = {champion.number for champion in champions}
    while next_number in used:
        next_number += 1
    return next_number