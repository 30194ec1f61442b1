import pytest

from corewarvm.champion import (
    find_available_number,
    is_number_used,
    parse_champion_bytes,
    read_champion_file,
)
from corewarvm.models import Champion, CorewarError
from corewarvm.op import (
    CHAMP_MAX_SIZE,
    COMMENT_OFFSET,
    COREWAR_EXEC_MAGIC,
    HEADER_SIZE,
    PROG_NAME_OFFSET,
    PROG_SIZE_OFFSET,
)


def build(code, name="zork", comment="just a test", size=None,
          magic=COREWAR_EXEC_MAGIC):
    data = bytearray(HEADER_SIZE)
    data[0:4] = magic.to_bytes(4, "big")
    encoded = name.encode()
    data[PROG_NAME_OFFSET:PROG_NAME_OFFSET + len(encoded)] = encoded
    prog_size = len(code) if size is None else size
    data[PROG_SIZE_OFFSET:PROG_SIZE_OFFSET + 4] = prog_size.to_bytes(
        4, "big", signed=True)
    encoded = comment.encode()
    data[COMMENT_OFFSET:COMMENT_OFFSET + len(encoded)] = encoded
    return bytes(data) + code


def test_parse_round_trip():
    code = bytes([1, 0, 0, 0, 1])
    assert parse_champion_bytes(build(code)) == ("zork", "just a test", code)


def test_extra_bytes_after_code_are_ignored():
    code = bytes([9, 0, 3])
    name, _, parsed = parse_champion_bytes(build(code, size=2))
    assert parsed == code[:2]
    assert name == "zork"


def test_short_header_rejected():
    with pytest.raises(CorewarError, match="invalid champion file"):
        parse_champion_bytes(build(b"\x01")[:100])


def test_bad_magic_rejected():
    with pytest.raises(CorewarError, match="magic"):
        parse_champion_bytes(build(b"\x01", magic=0x123456))


@pytest.mark.parametrize("size", [0, -3, CHAMP_MAX_SIZE + 1])
def test_bad_size_rejected(size):
    with pytest.raises(CorewarError, match="program size"):
        parse_champion_bytes(build(b"\x01", size=size))


def test_max_size_accepted():
    code = bytes(CHAMP_MAX_SIZE)
    assert parse_champion_bytes(build(code))[2] == code


def test_truncated_code_rejected():
    with pytest.raises(CorewarError, match="invalid champion file"):
        parse_champion_bytes(build(b"\x01\x02", size=10))


def test_read_champion_file_fills_fields(tmp_path):
    path = tmp_path / "a.cor"
    code = bytes([1, 0, 0, 0, 7, 0])
    path.write_bytes(build(code, name="alpha", comment="hello"))
    champion = Champion(filename=str(path))
    read_champion_file(champion)
    assert champion.name == "alpha"
    assert champion.comment == "hello"
    assert champion.code == code
    assert champion.size == len(code)


def test_read_missing_file(tmp_path):
    champion = Champion(filename=str(tmp_path / "missing.cor"))
    with pytest.raises(CorewarError, match="cannot open"):
        read_champion_file(champion)


def test_is_number_used():
    champions = [Champion(number=1), Champion(number=3)]
    assert is_number_used(3, champions)
    assert not is_number_used(2, champions)


def test_find_available_number_skips_used():
    champions = [Champion(number=1), Champion(number=2), Champion(number=4)]
    assert find_available_number(1, champions) == 3
    assert find_available_number(4, champions) == 5
    assert find_available_number(7, []) == 7