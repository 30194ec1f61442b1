"""Champions, run options and processes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .memory import calculate_address, read_memory, to_int32
from .op import DIR_SIZE, MAX_ARGS_NUMBER, REG_NUMBER, ArgType


class CorewarError(Exception):
    """Raised when a champion or the machine cannot be set up."""


@dataclass
class Champion:
    """A program taking part in the match."""

    filename: str = ""
    number: int = -1
    load_address: int = -1
    size: int = 0
    name: str = ""
    comment: str = ""
    code: bytes = b""
    alive: bool = True
    last_live: int = 0
    lives_in_period: int = 0


@dataclass
class Options:
    """Run-time options taken from the command line."""

    dump_flag: bool = False
    dump_cycle: int = 0
    json_output: bool = False


def _zeros(count: int) -> list[int]:
    return [0] * count


@dataclass
class Process:
    """An execution thread of a champion."""

    champion_number: int
    pc: int
    registers: list[int] = field(default_factory=lambda: _zeros(REG_NUMBER))
    carry: bool = False
    wait_cycles: int = 0
    current_op: int = -1
    last_live_cycle: int = 0
    alive: bool = True
    current_op_args: list[int] = field(
        default_factory=lambda: _zeros(MAX_ARGS_NUMBER))
    current_op_arg_types: list[int] = field(
        default_factory=lambda: _zeros(MAX_ARGS_NUMBER))

    @classmethod
    def from_champion(cls, champion: Champion, cycle: int) -> Process:
        """Create the first process of a champion at the given cycle."""
        process = cls(champion_number=champion.number,
                      pc=champion.load_address, last_live_cycle=cycle)
        process.registers[0] = champion.number
        return process

    def get_register(self, reg_num: int) -> int:
        """Value of register reg_num (1-based); 0 if out of range."""
        if not 1 <= reg_num <= REG_NUMBER:
            return 0
        return self.registers[reg_num - 1]

    def set_register(self, reg_num: int, value: int) -> bool:
        """Store a 32-bit value in register reg_num; False if out of range."""
        if not 1 <= reg_num <= REG_NUMBER:
            return False
        self.registers[reg_num - 1] = to_int32(value)
        return True

    def param_value(self, param_type: int, param_value: int,
                    memory: bytearray, is_modulo: bool) -> int:
        """Resolve an argument to the value it designates."""
        if param_type == ArgType.REG:
            return self.get_register(param_value)
        if param_type == ArgType.DIR:
            return param_value
        if param_type == ArgType.IND:
            address = calculate_address(self.pc, param_value, is_modulo)
            return read_memory(memory, address, DIR_SIZE)
        return 0

    def clone(self, pc: int) -> Process:
        """Copy this process to a new pc, ready to fetch its next instruction."""
        return replace(
            self,
            pc=pc,
            wait_cycles=0,
            current_op=-1,
            registers=list(self.registers),
            current_op_args=list(self.current_op_args),
            current_op_arg_types=list(self.current_op_arg_types),
        )