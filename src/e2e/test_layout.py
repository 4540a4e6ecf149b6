import struct
import pytest
from hibpdb.DB.layout import (
    ADDR_MAP_SIZE, TABLE_BYTES, RECORD_SIZE, PREFIX_ERROR,
    new_table, table_to_bytes, table_from_bytes, record_offset, expected_file_size, parse_prefix,
)
from hibpdb.errors import ClientInputError, DatabaseFormatError

def test_constants():
    assert ADDR_MAP_SIZE == 16_777_217
    assert TABLE_BYTES == 67_108_868
    assert RECORD_SIZE == 17
    assert record_offset(0) == TABLE_BYTES
    assert record_offset(3) == TABLE_BYTES + 51
    assert expected_file_size(10) == TABLE_BYTES + 170

def test_table_is_little_endian():
    t = new_table()
    t[0] = 0
    t[1] = 0x01020304
    t[ADDR_MAP_SIZE - 1] = 7
    raw = table_to_bytes(t)
    assert len(raw) == TABLE_BYTES
    assert raw[4:8] == struct.pack("<I", 0x01020304)
    assert raw[-4:] == b"\x07\0\0\0"
    back = table_from_bytes(raw)
    assert back[1] == 0x01020304 and back[-1] == 7

def test_table_from_bytes_rejects_wrong_size():
    with pytest.raises(DatabaseFormatError):
        table_from_bytes(b"\0" * 8)

@pytest.mark.parametrize("text,value", [("000000", 0), ("ffffff", 0xFFFFFF), ("21BD12", 0x21BD12)])
def test_parse_prefix(text, value):
    assert parse_prefix(text) == value

@pytest.mark.parametrize("text", ["", "fffff", "1234567", "gggggg", "-00001", "0x1234", "12_345", "١٢٣٤٥٦"])
def test_parse_prefix_rejects(text):
    with pytest.raises(ClientInputError) as ei:
        parse_prefix(text)
    assert str(ei.value) == PREFIX_ERROR
