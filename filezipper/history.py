import os
from dataclasses import dataclass
from datetime import datetime

COMPRESSED_EXTENSION = ".huff"
DEFAULT_HISTORY_FILE = "filezipper_history.txt"


@dataclass(frozen=True)
class HistoryEntry:
    """One finished compress/decompress operation."""

    operation: str
    original_path: str
    output_path: str
    file_type: str
    timestamp: datetime

    @classmethod
    def now(cls, operation, original_path, output_path, file_type):
        return cls(operation, str(original_path), str(output_path), file_type, datetime.now())

    def format(self):
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        file_type = self.file_type or "(none)"
        return f"{stamp} | {self.operation} | {self.original_path} -> {self.output_path} | {file_type}"


class TextHistoryLog:
    """Append-only, human-readable log of past operations."""

    def __init__(self, path=DEFAULT_HISTORY_FILE):
        self.path = path

    def record(self, entry):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        with open(self.path, "a", encoding="utf-8", errors="surrogateescape") as f:
            f.write(entry.format() + "\n")

    def read_lines(self):
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8", errors="surrogateescape") as f:
            return [line.rstrip("\n") for line in f if line.strip()]


# -----------------------------------------------------------
# OUTPUT NAMES
# -----------------------------------------------------------
def compressed_path_for(source):
    """report.pdf -> report.huff, next to the source; notes.huff -> notes.huff.huff."""
    stem, ext = os.path.splitext(str(source))
    if ext == COMPRESSED_EXTENSION:
        return str(source) + COMPRESSED_EXTENSION
    return stem + COMPRESSED_EXTENSION


def decompressed_path_for(container, extension):
    """report.huff + '.pdf' -> report_decompressed.pdf, next to the container."""
    stem, _ = os.path.splitext(str(container))
    return f"{stem}_decompressed{extension}"
