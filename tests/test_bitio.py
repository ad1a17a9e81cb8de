import pytest

from filezipper.bitio import BitPacker, pack_codes, unpack_bits
from filezipper.codes import code_lengths, is_prefix_free
from filezipper.errors import UnknownSymbolError

CODES = {ord("a"): "0", ord("b"): "10", ord("c"): "11"}


def test_pack_is_msb_first_and_zero_padded():
    # a a b c -> 0 0 10 11 -> 001011 + 00 padding
    assert pack_codes(b"aabc", CODES) == bytes([0b00101100])


def test_pack_exact_byte_has_no_padding_byte():
    # 4 x 'b' = 8 bits
    assert pack_codes(b"bbbb", CODES) == bytes([0b10101010])


def test_aaab_packs_into_one_byte():
    codes = {ord("a"): "1", ord("b"): "0"}
    assert pack_codes(b"aaab", codes) == bytes([0b11100000])


def test_packer_carries_bits_between_chunks():
    data = b"abcabcabcacbba" * 7
    packer = BitPacker(CODES)
    out = bytearray()
    for i in range(0, len(data), 3):
        out += packer.pack(data[i:i + 3])
    out += packer.flush()
    assert bytes(out) == pack_codes(data, CODES)
    assert packer.bits_written == sum(len(CODES[b]) for b in data)


def test_flush_with_nothing_pending():
    packer = BitPacker(CODES)
    assert packer.pack(b"") == b""
    assert packer.flush() == b""


def test_unknown_symbol():
    with pytest.raises(UnknownSymbolError) as excinfo:
        pack_codes(b"abz", CODES)
    assert excinfo.value.symbol == ord("z")


def test_unpack_bits():
    bits = unpack_bits(bytes([0b10000001, 0xFF]))
    assert bits.tolist() == [1, 0, 0, 0, 0, 0, 0, 1] + [1] * 8


def test_unpack_inverts_pack():
    data = b"cabbacbaa"
    bits = unpack_bits(pack_codes(data, CODES)).tolist()
    expected = [int(bit) for byte in data for bit in CODES[byte]]
    assert bits[:len(expected)] == expected
    assert not any(bits[len(expected):])


def test_code_helpers():
    assert code_lengths(CODES) == {ord("a"): 1, ord("b"): 2, ord("c"): 2}
    assert is_prefix_free(CODES)
    assert not is_prefix_free({1: "0", 2: "01"})
