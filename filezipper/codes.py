### CODE GENERATION ###
def generate_codes(root):
    """
    Walks the tree and returns the {byte: code} lookup table.

    '0' is appended when descending left and '1' when descending right; a leaf
    records the path that led to it. Uses an explicit stack because skewed
    trees over 256 symbols can be deeper than is comfortable to recurse.
    """
    huffman_codes = {}
    stack = [(root, "")]

    while stack:
        node, current_code = stack.pop()
        if node is None:
            continue

        # Stop at a leaf node (a byte)
        if node.byte is not None:
            huffman_codes[node.byte] = current_code
            continue

        # Right is pushed first so the left subtree is visited first
        stack.append((node.right, current_code + '1'))
        stack.append((node.left, current_code + '0'))

    return huffman_codes


def code_lengths(codes):
    return {byte: len(code) for byte, code in codes.items()}


def is_prefix_free(codes):
    """True if no code in the table is a prefix of another one."""
    # After sorting, a prefix always sits directly before some code it prefixes
    ordered = sorted(codes.values())
    for shorter, longer in zip(ordered, ordered[1:]):
        if longer.startswith(shorter):
            return False
    return True
