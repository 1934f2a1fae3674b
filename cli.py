"""
trielex - Command Line Interface

Usage:
    trielex source.c [--config lexer.json] [--categories] [--verbose]
    echo source.c | trielex
"""

import sys
import argparse
import logging

from components.config import DEFAULT_CONFIG, LexerConfig, build_tokenizer
from components.tokenizer import ByteStream, Category


logger = logging.getLogger("trielex")


def main(argv=None, stdin=None, stdout=None):
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    parser = argparse.ArgumentParser(
        prog="trielex",
        description="Tokenize a file with a trie of registered keywords and symbols",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the source file (read from stdin when omitted)",
    )
    parser.add_argument(
        "-c", "--config",
        help="JSON file with \"keywords\" and \"symbols\" lists (default: built-in C profile)",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        help="Prefix each token with its category",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    filename = args.input
    if filename is None:
        # first whitespace-delimited word, skipping blank lines
        for line in stdin:
            words = line.split()
            if words:
                filename = words[0]
                break
        if filename is None:
            print("[trielex] Error: no input file given", file=sys.stderr)
            return 1

    try:
        config = LexerConfig.from_json(args.config) if args.config else DEFAULT_CONFIG
    except (OSError, ValueError) as e:
        print(f"[trielex] Error: bad config {args.config!r}: {e}", file=sys.stderr)
        return 1
    tokenizer = build_tokenizer(config)

    try:
        strm = open(filename, "rb")
    except OSError as e:
        print(f"[trielex] Error: cannot open {filename!r}: {e.strerror}", file=sys.stderr)
        return 1

    count = 0
    with strm:
        stream = ByteStream(strm)
        tok = tokenizer.next_token(stream)
        while tok.category != Category.END:
            if args.categories:
                stdout.write(f"{tok.category.name}\t{tok.text}\n")
            else:
                stdout.write(f"{tok.text}\n")
            count += 1
            tok = tokenizer.next_token(stream)
    logger.debug("%s: %d tokens", filename, count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
