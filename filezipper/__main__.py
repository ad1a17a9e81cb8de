import argparse
import os
import sys

from .container import compress, decompress
from .history import DEFAULT_HISTORY_FILE, TextHistoryLog


def build_parser():
    parser = argparse.ArgumentParser(
        prog="filezipper",
        description="Compress and decompress files with Huffman coding.")
    parser.add_argument("--history", default=DEFAULT_HISTORY_FILE,
                        help="history log file (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="compress a file into a .huff container")
    p.add_argument("source")
    p.add_argument("-o", "--output", help="destination (default: <name>.huff)")

    p = sub.add_parser("decompress", help="restore a file from a .huff container")
    p.add_argument("source")
    p.add_argument("-o", "--output", help="destination (default: <name>_decompressed<ext>)")

    sub.add_parser("history", help="show past operations")
    return parser


def report(result):
    if not result:
        print(f"❌ {result.operation.capitalize()} failed for '{result.source}': "
              f"{result.error}: {result.reason}")
        return 1

    if result.operation == "compress":
        print(f"✅ Compressed '{result.source}' → '{result.destination}'")
        print(f"   {result.original_size} → {result.compressed_size} bytes "
              f"({result.saved_percent:.2f}% reduction)")
    else:
        print(f"✅ Decompressed '{result.source}' → '{result.destination}'")
        print(f"   {result.original_size} bytes restored")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    history = TextHistoryLog(args.history)

    if args.command == "history":
        lines = history.read_lines()
        if not lines:
            print("No operations recorded yet.")
        for line in lines:
            print(line)
        return 0

    if not os.path.exists(args.source):
        print(f"🚨 ERROR: File not found at '{args.source}'.")
        return 1

    if args.command == "compress":
        result = compress(args.source, args.output, history=history)
    else:
        result = decompress(args.source, args.output, history=history)
    return report(result)


if __name__ == "__main__":
    sys.exit(main())
