import heapq

from .errors import EmptyInputError


### HUFFMAN NODE CLASS ###
class HuffmanNode:
    """Represents a node in the Huffman tree."""

    __slots__ = ("byte", "freq", "left", "right")

    def __init__(self, byte=None, freq=0, left=None, right=None):
        # byte: The byte value (0-255) for leaves. None for internal nodes.
        self.byte = byte
        # freq: The frequency of the byte or the combined frequency of its children.
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.byte is not None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(byte={self.byte}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq})"


### TREE CONSTRUCTION ###
def build_huffman_tree(frequency):
    """
    Builds the Huffman tree for a {byte: count} table and returns its root.

    Heap entries are ordered by (frequency, sequence number). Leaves get their
    sequence numbers in ascending byte order and every merged node gets the
    next free one, so the same table always produces the same tree no matter
    how the dict was ordered. The first node popped becomes the left child.
    """
    if not frequency:
        raise EmptyInputError("cannot build a Huffman tree from an empty frequency table")

    priority_queue = []
    for seq, byte in enumerate(sorted(frequency)):
        count = frequency[byte]
        if count <= 0:
            raise ValueError(f"frequency of byte {byte} must be positive, got {count}")
        priority_queue.append((count, seq, HuffmanNode(byte=byte, freq=count)))
    heapq.heapify(priority_queue)

    # One distinct byte: hang the leaf under a synthetic root so it gets code '0'
    if len(priority_queue) == 1:
        leaf = priority_queue[0][2]
        return HuffmanNode(freq=leaf.freq, left=leaf)

    seq = len(priority_queue)
    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue)
        right_freq, _, right = heapq.heappop(priority_queue)

        parent = HuffmanNode(freq=left_freq + right_freq, left=left, right=right)
        heapq.heappush(priority_queue, (parent.freq, seq, parent))
        seq += 1

    return priority_queue[0][2]
