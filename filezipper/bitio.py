import numpy as np

from .codes import code_lengths
from .errors import UnknownSymbolError


class BitPacker:
    """
    Turns input bytes into their Huffman codes packed 8 bits per output byte.

    Bits are packed most significant bit first. Anything short of a full byte
    is carried over to the next pack() call, and flush() pads the final
    partial byte with zero bits in its low-order positions.
    """

    def __init__(self, codes):
        lengths = code_lengths(codes)
        width = max(lengths.values(), default=0)
        self._bits = np.zeros((256, max(width, 1)), dtype=np.uint8)
        self._mask = np.zeros((256, max(width, 1)), dtype=bool)
        self._lengths = np.zeros(256, dtype=np.int64)

        for byte, code in codes.items():
            self._bits[byte, :len(code)] = [int(bit) for bit in code]
            self._mask[byte, :len(code)] = True
            self._lengths[byte] = lengths[byte]

        self._carry = np.zeros(0, dtype=np.uint8)
        self.bits_written = 0

    def pack(self, chunk):
        """Encodes a chunk of input and returns every completed output byte."""
        if not chunk:
            return b""
        symbols = np.frombuffer(chunk, dtype=np.uint8)

        missing = self._lengths[symbols] == 0
        if missing.any():
            raise UnknownSymbolError(int(symbols[np.argmax(missing)]))

        # Boolean indexing walks rows in order, which concatenates the codes
        bits = self._bits[symbols][self._mask[symbols]]
        self.bits_written += bits.size

        if self._carry.size:
            bits = np.concatenate((self._carry, bits))
        full = bits.size - bits.size % 8
        self._carry = bits[full:]
        return np.packbits(bits[:full]).tobytes()

    def flush(self):
        """Returns the zero-padded trailing byte, or b'' if nothing is pending."""
        if not self._carry.size:
            return b""
        tail = np.packbits(self._carry).tobytes()
        self._carry = np.zeros(0, dtype=np.uint8)
        return tail


def pack_codes(data, codes):
    """One-shot version of BitPacker for an in-memory buffer."""
    packer = BitPacker(codes)
    return packer.pack(data) + packer.flush()


def unpack_bits(payload):
    """
    Packed bytes -> numpy array of 0/1 values, MSB first.

    Padding bits of the final byte are included; the caller decides where the
    real data ends.
    """
    return np.unpackbits(np.frombuffer(payload, dtype=np.uint8))

