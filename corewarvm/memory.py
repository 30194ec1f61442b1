"""Circular memory arithmetic, reads, writes and hex dumps."""

from __future__ import annotations

import sys
from typing import TextIO

from .op import IDX_MOD, MEM_SIZE


def to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    return ((value + 2**31) % 2**32) - 2**31


def _trunc_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def calculate_address(base_address: int, offset: int, apply_idx_mod: bool) -> int:
    """Return base_address + offset inside memory, optionally limiting the offset."""
    if apply_idx_mod:
        offset = _trunc_mod(offset, IDX_MOD)
    address = _trunc_mod(base_address + offset, MEM_SIZE)
    if address < 0:
        address += MEM_SIZE
    return address


def read_short(memory: bytearray, pos: int) -> int:
    """Read a signed big-endian 16-bit value."""
    raw = bytes((memory[pos % MEM_SIZE], memory[(pos + 1) % MEM_SIZE]))
    return int.from_bytes(raw, "big", signed=True)


def read_int(memory: bytearray, pos: int) -> int:
    """Read a signed big-endian 32-bit value."""
    raw = bytes(memory[(pos + i) % MEM_SIZE] for i in range(4))
    return int.from_bytes(raw, "big", signed=True)


def read_memory(memory: bytearray, address: int, size: int) -> int:
    """Read size bytes big-endian from address, wrapping around memory."""
    address %= MEM_SIZE
    value = 0
    for i in range(size):
        value = (value << 8) | memory[(address + i) % MEM_SIZE]
    return to_int32(value)


def write_memory(memory: bytearray, address: int, value: int, size: int) -> None:
    """Write the low size bytes of value big-endian at address."""
    address %= MEM_SIZE
    for i in reversed(range(size)):
        memory[(address + i) % MEM_SIZE] = value & 0xFF
        value >>= 8


def format_dump(memory: bytearray) -> str:
    """Render memory as uppercase hex, 32 bytes per line."""
    lines = (memory[start:start + 32].hex().upper()
             for start in range(0, MEM_SIZE, 32))
    return "\n".join(lines) + "\n"


def dump_memory(memory: bytearray, stream: TextIO | None = None) -> None:
    """Write the hex dump of memory to stream (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(format_dump(memory))
    out.flush()