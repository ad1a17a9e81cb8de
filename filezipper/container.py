"""
The .huff container: header layout, compress and decompress.

Layout (all integers little-endian):

    [extLen: 8 bytes][ext: extLen bytes, UTF-8 with surrogateescape]
    [tableCount: 8 bytes]
      tableCount x [byte: 1 byte][count: 4 bytes]   (ascending byte order)
    [payload: packed code bits, MSB first, zero-padded final byte]

The original size is not stored separately: it is the sum of the counts, and
the decoder stops as soon as that many bytes have been produced, so padding
bits at the end of the payload are never mistaken for data.
"""
import io
import os
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .bitio import BitPacker, unpack_bits
from .codes import generate_codes
from .errors import CodecError, CountOverflowError, MalformedContainerError, SameFileError
from .frequency import CHUNK_SIZE, calculate_frequency, count_bytes
from .history import HistoryEntry, compressed_path_for, decompressed_path_for
from .tree import build_huffman_tree

BYTE_ORDER = "little"
LENGTH_WIDTH = 8   # extLen and tableCount
SYMBOL_WIDTH = 1
COUNT_WIDTH = 4
MAX_COUNT = (1 << (8 * COUNT_WIDTH)) - 1


@dataclass
class ContainerHeader:
    extension: str
    frequency: Dict[int, int]
    payload_offset: int

    @property
    def total_size(self):
        return sum(self.frequency.values())


@dataclass
class CodecResult:
    """Outcome of compress()/decompress(); error is None on success."""

    success: bool
    operation: str
    source: str
    destination: Optional[str] = None
    extension: Optional[str] = None
    original_size: int = 0
    compressed_size: int = 0
    error: Optional[str] = None
    reason: Optional[str] = None

    def __bool__(self):
        return self.success

    @property
    def saved(self):
        return self.original_size - self.compressed_size

    @property
    def saved_percent(self):
        if not self.original_size:
            return 0
        return round(self.saved / self.original_size * 100, 2)

    def to_dict(self):
        data = asdict(self)
        data["saved"] = self.saved
        data["saved_percent"] = self.saved_percent
        return data


### HEADER ###
def encode_extension(extension):
    # Undecodable filename bytes come back from os.path as lone surrogates
    try:
        return extension.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as e:
        raise MalformedContainerError(f"extension {extension!r} cannot be stored: {e}") from None


def _int(value, width):
    return value.to_bytes(width, byteorder=BYTE_ORDER)


def write_header(fh, extension, frequency):
    """Writes extension tag and frequency table; returns the bytes written."""
    ext = encode_extension(extension)
    header = bytearray(_int(len(ext), LENGTH_WIDTH))
    header += ext
    header += _int(len(frequency), LENGTH_WIDTH)

    for byte in sorted(frequency):
        count = frequency[byte]
        if count > MAX_COUNT:
            raise CountOverflowError(
                f"byte 0x{byte:02x} occurs {count} times, the format stores at most {MAX_COUNT}")
        header += _int(byte, SYMBOL_WIDTH)
        header += _int(count, COUNT_WIDTH)

    fh.write(header)
    return len(header)


def _remaining(fh):
    position = fh.tell()
    end = fh.seek(0, io.SEEK_END)
    fh.seek(position)
    return end - position


def _read_exact(fh, size, what):
    data = fh.read(size)
    if len(data) < size:
        raise MalformedContainerError(f"file ends inside the {what}")
    return data


def _read_int(fh, width, what):
    return int.from_bytes(_read_exact(fh, width, what), byteorder=BYTE_ORDER)


def read_header(fh):
    """Reads the header from the current position and leaves fh at the payload."""
    ext_len = _read_int(fh, LENGTH_WIDTH, "extension length")
    if ext_len > _remaining(fh):
        raise MalformedContainerError(f"extension length {ext_len} exceeds the file size")
    extension = _read_exact(fh, ext_len, "extension").decode("utf-8", "surrogateescape")

    table_count = _read_int(fh, LENGTH_WIDTH, "table size")
    if table_count == 0 or table_count > 256:
        raise MalformedContainerError(f"impossible frequency table size {table_count}")
    entry_width = SYMBOL_WIDTH + COUNT_WIDTH
    if table_count * entry_width > _remaining(fh):
        raise MalformedContainerError(
            f"frequency table of {table_count} entries exceeds the file size")

    frequency = {}
    for _ in range(table_count):
        byte = _read_int(fh, SYMBOL_WIDTH, "frequency table")
        count = _read_int(fh, COUNT_WIDTH, "frequency table")
        if byte in frequency:
            raise MalformedContainerError(f"byte 0x{byte:02x} appears twice in the frequency table")
        if count == 0:
            raise MalformedContainerError(f"byte 0x{byte:02x} has a zero count")
        frequency[byte] = count

    return ContainerHeader(extension=extension, frequency=frequency, payload_offset=fh.tell())


def read_container_info(path):
    """Header of a .huff file, e.g. to learn the stored extension."""
    with open(path, 'rb') as fh:
        return read_header(fh)


### PAYLOAD ###
def _encode_payload(src, dst, codes, chunk_size=CHUNK_SIZE):
    packer = BitPacker(codes)
    written = 0

    chunk = src.read(chunk_size)
    while chunk:
        packed = packer.pack(chunk)
        dst.write(packed)
        written += len(packed)
        chunk = src.read(chunk_size)

    tail = packer.flush()
    dst.write(tail)
    return written + len(tail)


def _decode_payload(src, dst, root, total_size, chunk_size=CHUNK_SIZE):
    current_node = root
    decoded = 0

    while decoded < total_size:
        chunk = src.read(chunk_size)
        if not chunk:
            raise MalformedContainerError(
                f"payload ended after {decoded} of {total_size} bytes")

        out = bytearray()
        for bit in unpack_bits(chunk).tolist():
            current_node = current_node.right if bit else current_node.left
            if current_node is None:
                raise MalformedContainerError("payload contains a path that is not in the tree")

            # Check for leaf node
            if current_node.byte is not None:
                out.append(current_node.byte)
                current_node = root
                decoded += 1
                if decoded == total_size:
                    break  # the rest is padding
        dst.write(out)

    return decoded


def _encode(src, dst, extension, frequency):
    header_size = write_header(dst, extension, frequency)
    root = build_huffman_tree(frequency)
    codes = generate_codes(root)
    return header_size + _encode_payload(src, dst, codes)


def _decode(src, dst):
    header = read_header(src)
    root = build_huffman_tree(header.frequency)
    _decode_payload(src, dst, root, header.total_size)
    return header


def compress_bytes(data, extension=""):
    """In-memory compress: raw bytes -> complete .huff container."""
    frequency = count_bytes(data)
    build_huffman_tree(frequency)  # fail on empty input before writing anything
    out = io.BytesIO()
    _encode(io.BytesIO(data), out, extension, frequency)
    return out.getvalue()


def decompress_bytes(blob):
    """In-memory decompress: .huff container -> (extension, original bytes)."""
    out = io.BytesIO()
    header = _decode(io.BytesIO(blob), out)
    return header.extension, out.getvalue()


### FILE COMPRESSION ###
def _same_file(source, destination):
    if os.path.exists(source) and os.path.exists(destination):
        return os.path.samefile(source, destination)
    return os.path.abspath(str(source)) == os.path.abspath(str(destination))


def _check_destination(source, destination):
    if _same_file(source, destination):
        raise SameFileError(f"refusing to overwrite the source {source}")


def compress_file(input_path, output_path):
    """
    Compresses input_path into output_path. Raises CodecError or OSError.

    The source is read twice: once to count bytes, once to encode them.
    """
    _, extension = os.path.splitext(str(input_path))
    encode_extension(extension)  # fail before the output is opened
    _check_destination(input_path, output_path)

    frequency = calculate_frequency(input_path)
    build_huffman_tree(frequency)  # EmptyInputError before the output is created

    with open(input_path, 'rb') as input_file, open(output_path, 'wb') as output_file:
        compressed_size = _encode(input_file, output_file, extension, frequency)

    return {
        "extension": extension,
        "original_size": sum(frequency.values()),
        "compressed_size": compressed_size,
    }


def decompress_file(compressed_path, output_path=None):
    """
    Decompresses compressed_path. Raises CodecError or OSError.

    Without output_path the name is derived from the stored extension.
    """
    with open(compressed_path, 'rb') as input_file:
        header = read_header(input_file)
        if output_path is None:
            output_path = decompressed_path_for(compressed_path, header.extension)
        _check_destination(compressed_path, output_path)
        root = build_huffman_tree(header.frequency)

        with open(output_path, 'wb') as output_file:
            _decode_payload(input_file, output_file, root, header.total_size)

    return {
        "extension": header.extension,
        "original_size": header.total_size,
        "compressed_size": os.path.getsize(compressed_path),
        "destination": str(output_path),
    }


# -----------------------------------------------------------
# PUBLIC BOUNDARY
# -----------------------------------------------------------
def _failure(operation, source, destination, error):
    kind = error.kind if isinstance(error, CodecError) else "IOError"
    return CodecResult(success=False, operation=operation, source=str(source),
                       destination=str(destination) if destination else None,
                       error=kind, reason=str(error))


def compress(source, destination=None, history=None):
    """
    Compresses source into a .huff container and reports a CodecResult.

    history, if given, is any object with a record(entry) method; it is told
    about successful operations only.
    """
    if destination is None:
        destination = compressed_path_for(source)
    try:
        stats = compress_file(source, destination)
    except (CodecError, OSError) as e:
        return _failure("compress", source, destination, e)

    if history is not None:
        history.record(HistoryEntry.now("compress", source, destination, stats["extension"]))
    return CodecResult(success=True, operation="compress", source=str(source),
                       destination=str(destination), **stats)


def decompress(source, destination=None, history=None):
    """Restores the original bytes from a .huff container; see compress()."""
    try:
        stats = decompress_file(source, destination)
    except (CodecError, OSError) as e:
        return _failure("decompress", source, destination, e)

    destination = stats.pop("destination")
    if history is not None:
        history.record(HistoryEntry.now("decompress", source, destination, stats["extension"]))
    return CodecResult(success=True, operation="decompress", source=str(source),
                       destination=destination, **stats)
