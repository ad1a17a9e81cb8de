"""Error kinds raised by the codec."""


class CodecError(Exception):
    """Base class for every failure the codec reports."""

    kind = "CodecError"


class EmptyInputError(CodecError):
    """The frequency table has no entries, so no tree can be built."""

    kind = "EmptyInputError"


class UnknownSymbolError(CodecError):
    """A byte was met during encoding that has no code."""

    kind = "UnknownSymbolError"

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"byte 0x{symbol:02x} has no code in this table")


class MalformedContainerError(CodecError):
    """Header or payload of a .huff file is truncated or impossible."""

    kind = "MalformedContainerError"


class CountOverflowError(CodecError):
    """A symbol occurs more often than the 4-byte count field can hold."""

    kind = "CountOverflowError"


class SameFileError(CodecError):
    """Destination and source are the same file; writing would destroy the input."""

    kind = "IOError"
