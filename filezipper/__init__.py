"""Lossless byte-level Huffman compression with a self-describing .huff container."""
from .codes import generate_codes, is_prefix_free
from .container import (
    CodecResult,
    ContainerHeader,
    compress,
    compress_bytes,
    compress_file,
    decompress,
    decompress_bytes,
    decompress_file,
    read_container_info,
)
from .errors import (
    CodecError,
    CountOverflowError,
    EmptyInputError,
    MalformedContainerError,
    UnknownSymbolError,
)
from .frequency import calculate_frequency, count_bytes
from .history import HistoryEntry, TextHistoryLog
from .tree import HuffmanNode, build_huffman_tree

__version__ = "1.0.0"
