import numpy as np

# Files are read in chunks of this many bytes on every pass.
CHUNK_SIZE = 64 * 1024


### FREQUENCY COUNTING ###
def _histogram(data):
    # 256 bins, one per byte value
    return np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)


def _to_table(histogram):
    """Turns a 256-bin histogram into a sparse {byte: count} dict."""
    return {int(byte): int(histogram[byte]) for byte in np.flatnonzero(histogram)}


def count_bytes(data):
    """Calculates the frequency of each byte in an in-memory buffer."""
    if not data:
        return {}
    return _to_table(_histogram(data))


def calculate_frequency(file_path, chunk_size=CHUNK_SIZE):
    """
    Calculates the frequency of each byte in the given file.

    Only bytes that actually occur get an entry, and the entries come out in
    ascending byte order. The sum of all counts equals the file size.
    """
    histogram = np.zeros(256, dtype=np.int64)

    with open(file_path, 'rb') as file:
        chunk = file.read(chunk_size)
        while chunk:
            histogram += _histogram(chunk)
            chunk = file.read(chunk_size)

    return _to_table(histogram)
