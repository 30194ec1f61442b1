"""Semantics of the sixteen machine instructions."""

from __future__ import annotations

import sys
from typing import Any, Callable

from .memory import calculate_address, read_memory, to_int32, write_memory
from .models import Process
from .op import OP_TAB, REG_NUMBER, REG_SIZE, ArgType

InstructionFn = Callable[[Any, Process], None]

_ANY_TYPE = ArgType.REG | ArgType.DIR | ArgType.IND


def _is_register(arg_type: int, value: int) -> bool:
    return arg_type == ArgType.REG and 1 <= value <= REG_NUMBER


def _write_text(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _write_bytes(data: bytes) -> None:
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None)
    stream.flush()
    if buffer is not None:
        buffer.write(data)
        buffer.flush()
    else:
        stream.write(data.decode("latin-1"))
        stream.flush()


def _args(process: Process, count: int) -> list[tuple[int, int]]:
    return list(zip(process.current_op_arg_types[:count],
                    process.current_op_args[:count]))


def _value(vm: Any, process: Process, arg_type: int, value: int) -> int:
    return process.param_value(arg_type, value, vm.memory, True)


def _store_result(process: Process, reg_num: int, result: int) -> None:
    result = to_int32(result)
    process.set_register(reg_num, result)
    process.carry = result == 0


def op_live(vm: Any, process: Process) -> None:
    """Report the champion named by the argument as alive."""
    arg_type, number = _args(process, 1)[0]
    if arg_type != ArgType.DIR:
        return
    process.last_live_cycle = vm.cycle_counter
    vm.lives_in_period += 1
    champion = next((c for c in vm.champions if c.number == number), None)
    if champion is None:
        return
    champion.last_live = vm.cycle_counter
    champion.lives_in_period += 1
    vm.last_alive_champion = number
    _write_text(f"The player {number}({champion.name}) is alive.\n")


def _load(vm: Any, process: Process, idx_mod: bool) -> None:
    (type1, value1), (type2, value2) = _args(process, 2)
    if not _is_register(type2, value2):
        return
    if type1 == ArgType.DIR:
        result = value1
    elif type1 == ArgType.IND:
        address = calculate_address(process.pc, value1, idx_mod)
        result = read_memory(vm.memory, address, REG_SIZE)
    else:
        return
    _store_result(process, value2, result)


def op_ld(vm: Any, process: Process) -> None:
    """Load a value into a register, limiting indirect offsets."""
    _load(vm, process, True)


def op_lld(vm: Any, process: Process) -> None:
    """Load a value into a register without limiting indirect offsets."""
    _load(vm, process, False)


def op_st(vm: Any, process: Process) -> None:
    """Store a register into another register or into memory."""
    (type1, value1), (type2, value2) = _args(process, 2)
    if not _is_register(type1, value1):
        return
    value = process.get_register(value1)
    if type2 == ArgType.REG:
        if 1 <= value2 <= REG_NUMBER:
            process.set_register(value2, value)
        return
    if type2 == ArgType.IND:
        address = calculate_address(process.pc, value2, True)
        write_memory(vm.memory, address, value, REG_SIZE)


def _arith(vm: Any, process: Process,
           combine: Callable[[int, int], int]) -> None:
    args = _args(process, 3)
    if not all(_is_register(t, v) for t, v in args):
        return
    (type1, value1), (type2, value2), (_, value3) = args
    result = combine(_value(vm, process, type1, value1),
                     _value(vm, process, type2, value2))
    _store_result(process, value3, result)


def op_add(vm: Any, process: Process) -> None:
    """Add two registers into a third."""
    _arith(vm, process, lambda a, b: a + b)


def op_sub(vm: Any, process: Process) -> None:
    """Subtract two registers into a third."""
    _arith(vm, process, lambda a, b: a - b)


def op_and(vm: Any, process: Process) -> None:
    """Bitwise AND of two arguments into a register."""
    (type1, value1), (type2, value2), (type3, value3) = _args(process, 3)
    if (not type1 & _ANY_TYPE or not type2 & _ANY_TYPE
            or not _is_register(type3, value3)):
        return
    result = (_value(vm, process, type1, value1)
              & _value(vm, process, type2, value2))
    _store_result(process, value3, result)


def op_or(vm: Any, process: Process) -> None:
    """Bitwise OR of two arguments into a register."""
    (type1, value1), (type2, value2), (type3, value3) = _args(process, 3)
    if not _is_register(type3, value3):
        return
    result = (_value(vm, process, type1, value1)
              | _value(vm, process, type2, value2))
    _store_result(process, value3, result)


def op_xor(vm: Any, process: Process) -> None:
    """Bitwise XOR of two arguments into a register."""
    (type1, value1), (type2, value2), (type3, value3) = _args(process, 3)
    result = to_int32(_value(vm, process, type1, value1)
                      ^ _value(vm, process, type2, value2))
    process.set_register(value3, result)
    if not _is_register(type3, value3):
        return
    process.carry = result == 0


def op_zjmp(vm: Any, process: Process) -> None:
    """Jump relative to pc when the carry is set."""
    if process.carry:
        process.pc = calculate_address(process.pc, process.current_op_args[0],
                                       True)


def _index_values(vm: Any, process: Process) -> tuple[int, int]:
    (type1, value1), (type2, value2) = _args(process, 2)
    return (_value(vm, process, type1, value1),
            _value(vm, process, type2, value2))


def _valid_index_types(process: Process) -> bool:
    type1, type2 = process.current_op_arg_types[:2]
    return (type1 in (ArgType.REG, ArgType.DIR, ArgType.IND)
            and type2 in (ArgType.REG, ArgType.DIR))


def op_ldi(vm: Any, process: Process) -> None:
    """Load from pc plus the sum of two arguments, limiting the offset."""
    type3, value3 = _args(process, 3)[2]
    if not _is_register(type3, value3) or not _valid_index_types(process):
        return
    first, second = _index_values(vm, process)
    address = calculate_address(process.pc, to_int32(first + second), True)
    _store_result(process, value3, read_memory(vm.memory, address, REG_SIZE))


def op_lldi(vm: Any, process: Process) -> None:
    """Load from pc plus the sum of two arguments without limiting it."""
    first, second = _index_values(vm, process)
    address = calculate_address(process.pc, to_int32(first + second), False)
    result = read_memory(vm.memory, address, REG_SIZE)
    type3, value3 = _args(process, 3)[2]
    if not _is_register(type3, value3) or not _valid_index_types(process):
        return
    _store_result(process, value3, result)


def op_sti(vm: Any, process: Process) -> None:
    """Store a register at pc plus the sum of two arguments."""
    (type1, value1), (type2, value2), (type3, value3) = _args(process, 3)
    if not _is_register(type1, value1):
        return
    register_value = process.get_register(value1)
    offset = to_int32(_value(vm, process, type2, value2)
                      + _value(vm, process, type3, value3))
    address = calculate_address(process.pc, offset, True)
    write_memory(vm.memory, address, register_value, REG_SIZE)


def op_fork(vm: Any, process: Process) -> None:
    """Start a copy of the process at a limited offset from pc."""
    pc = calculate_address(process.pc, process.current_op_args[0], True)
    vm.add_process(process.clone(pc))


def op_lfork(vm: Any, process: Process) -> None:
    """Start a copy of the process at an unlimited offset from pc."""
    pc = calculate_address(process.pc, process.current_op_args[0], False)
    vm.add_process(process.clone(pc))


def op_aff(vm: Any, process: Process) -> None:
    """Print the low byte of a register as a character."""
    arg_type, value = _args(process, 1)[0]
    if not _is_register(arg_type, value):
        return
    _write_bytes(bytes((process.get_register(value) & 0xFF,)))


_INSTRUCTIONS: dict[str, InstructionFn] = {
    "live": op_live, "ld": op_ld, "st": op_st, "add": op_add,
    "sub": op_sub, "and": op_and, "or": op_or, "xor": op_xor,
    "zjmp": op_zjmp, "ldi": op_ldi, "sti": op_sti, "fork": op_fork,
    "lld": op_lld, "lldi": op_lldi, "lfork": op_lfork, "aff": op_aff,
}


def instruction_for(opcode: int) -> InstructionFn:
    """Return the function implementing the given opcode (1 to 16)."""
    if not 1 <= opcode <= len(OP_TAB):
        raise ValueError(f"invalid opcode: {opcode}")
    return _INSTRUCTIONS[OP_TAB[opcode - 1].mnemonic]