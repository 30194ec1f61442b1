"""Virtual machine constants, argument types and the instruction table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

MEM_SIZE = 6 * 1024
IDX_MOD = 512
MAX_ARGS_NUMBER = 4

COMMENT_CHAR = "#"
LABEL_CHAR = ":"
DIRECT_CHAR = "%"
SEPARATOR_CHAR = ","
LABEL_CHARS = "abcdefghijklmnopqrstuvwxyz_0123456789"

NAME_CMD_STRING = ".name"
COMMENT_CMD_STRING = ".comment"

REG_NUMBER = 16

IND_SIZE = 2
DIR_SIZE = 4
REG_SIZE = DIR_SIZE

PROG_NAME_LENGTH = 128
COMMENT_LENGTH = 2048
COREWAR_EXEC_MAGIC = 0xEA83F3

# Layout of the on-disk champion header: magic, name, program size, comment,
# each field aligned as a 4-byte-aligned record.
PROG_NAME_OFFSET = 4
PROG_SIZE_OFFSET = 136
COMMENT_OFFSET = 140
HEADER_SIZE = 2192

CYCLE_TO_DIE = 1536
CYCLE_DELTA = 5
NBR_LIVE = 40
CHAMP_MAX_SIZE = MEM_SIZE // 6


class ArgType(IntFlag):
    """Kinds of instruction arguments; several may be combined."""

    REG = 1
    DIR = 2
    IND = 4
    LAB = 8


@dataclass(frozen=True)
class Op:
    """One entry of the instruction table."""

    mnemonic: str
    nbr_args: int
    types: tuple[ArgType, ...]
    code: int
    nbr_cycles: int
    comment: str

    @property
    def has_coding_byte(self) -> bool:
        """Whether the instruction is followed by an argument coding byte."""
        return self.code not in (1, 9, 12, 15)


_R, _D, _I = ArgType.REG, ArgType.DIR, ArgType.IND

OP_TAB: tuple[Op, ...] = (
    Op("live", 1, (_D,), 1, 10, "alive"),
    Op("ld", 2, (_D | _I, _R), 2, 5, "load"),
    Op("st", 2, (_R, _I | _R), 3, 5, "store"),
    Op("add", 3, (_R, _R, _R), 4, 10, "addition"),
    Op("sub", 3, (_R, _R, _R), 5, 10, "soustraction"),
    Op("and", 3, (_R | _D | _I, _R | _I | _D, _R), 6, 6,
       "et (and  r1, r2, r3   r1&r2 -> r3"),
    Op("or", 3, (_R | _I | _D, _R | _I | _D, _R), 7, 6,
       "ou  (or   r1, r2, r3   r1 | r2 -> r3"),
    Op("xor", 3, (_R | _I | _D, _R | _I | _D, _R), 8, 6,
       "ou (xor  r1, r2, r3   r1^r2 -> r3"),
    Op("zjmp", 1, (_D,), 9, 20, "jump if zero"),
    Op("ldi", 3, (_R | _D | _I, _D | _R, _R), 10, 25, "load index"),
    Op("sti", 3, (_R, _R | _D | _I, _D | _R), 11, 25, "store index"),
    Op("fork", 1, (_D,), 12, 800, "fork"),
    Op("lld", 2, (_D | _I, _R), 13, 10, "long load"),
    Op("lldi", 3, (_R | _D | _I, _D | _R, _R), 14, 50, "long load index"),
    Op("lfork", 1, (_D,), 15, 1000, "long fork"),
    Op("aff", 1, (_R,), 16, 2, "aff"),
)


def op_by_code(code: int) -> Op:
    """Return the instruction with the given opcode (1 to 16)."""
    if not 1 <= code <= len(OP_TAB):
        raise ValueError(f"invalid opcode: {code}")
    return OP_TAB[code - 1]


def swap_endian(value: int) -> int:
    """Reverse the byte order of a 32-bit integer, returning a signed value."""
    raw = (value & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(raw, "big", signed=True)