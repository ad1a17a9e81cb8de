import os

from filezipper.frequency import calculate_frequency, count_bytes


def test_count_bytes_is_sparse():
    freq = count_bytes(b"aaab")
    assert freq == {ord("a"): 3, ord("b"): 1}


def test_count_bytes_empty():
    assert count_bytes(b"") == {}


def test_count_bytes_all_values_and_nulls():
    data = bytes(range(256)) * 3 + b"\x00" * 5
    freq = count_bytes(data)
    assert len(freq) == 256
    assert freq[0] == 8
    assert freq[255] == 3
    assert sum(freq.values()) == len(data)


def test_calculate_frequency_matches_in_memory_scan(tmp_path):
    data = os.urandom(5000) + b"\x00\x00\xff"
    path = tmp_path / "blob.bin"
    path.write_bytes(data)

    # small chunks so the file is scanned in several pieces
    assert calculate_frequency(path, chunk_size=333) == count_bytes(data)


def test_calculate_frequency_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert calculate_frequency(path) == {}


def test_entries_in_ascending_byte_order():
    freq = count_bytes(b"zyxzyx\x01")
    assert list(freq) == sorted(freq)
