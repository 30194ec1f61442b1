import pytest

from corewarvm.op import (
    CHAMP_MAX_SIZE,
    COREWAR_EXEC_MAGIC,
    OP_TAB,
    ArgType,
    op_by_code,
    swap_endian,
)


def test_first_and_last_ops():
    assert op_by_code(1).mnemonic == "live"
    assert op_by_code(1).nbr_cycles == 10
    assert op_by_code(16).mnemonic == "aff"
    assert op_by_code(15).nbr_cycles == 1000


def test_codes_match_positions():
    assert [op_by_code(code).code for code in range(1, 17)] == list(range(1, 17))
    assert len(OP_TAB) == 16


@pytest.mark.parametrize("code", [0, 17, -1])
def test_invalid_opcode_raises(code):
    with pytest.raises(ValueError):
        op_by_code(code)


def test_argument_types():
    assert op_by_code(2).types[0] == ArgType.DIR | ArgType.IND
    assert op_by_code(3).types == (ArgType.REG, ArgType.IND | ArgType.REG)
    assert all(len(op.types) == op.nbr_args for op in OP_TAB)


def test_coding_byte_presence():
    without = [
        code for code in range(1, 17) if not op_by_code(code).has_coding_byte
    ]
    assert without == [1, 9, 12, 15]


@pytest.mark.parametrize("value", [0, 1, -1, 123456, -98765, 2**31 - 1, -(2**31)])
def test_swap_endian_is_involution(value):
    assert swap_endian(swap_endian(value)) == value


def test_swap_endian_decodes_magic():
    raw = COREWAR_EXEC_MAGIC.to_bytes(4, "big")
    as_little = int.from_bytes(raw, "little", signed=True)
    assert swap_endian(as_little) == COREWAR_EXEC_MAGIC


def test_swap_endian_decodes_max_program_size():
    raw = CHAMP_MAX_SIZE.to_bytes(4, "big")
    as_little = int.from_bytes(raw, "little", signed=True)
    assert swap_endian(as_little) == 1024