"""
Maximal-munch tokenizer driven by a compressed prefix trie.

The scanner reads one character at a time from a `ByteStream` and grows the
current token until it hits a word boundary (whitespace, or a change between
alphanumeric and non-alphanumeric characters) or until the text read so far
is a registered SYMBOL that no longer symbol can extend with the next
character. The token is then classified by an exact trie lookup; anything not
registered comes back as a USER token.

Character classes are fixed and ASCII-only (the "C" locale):
letters `[a-zA-Z]`, digits `[0-9]`, whitespace `" \\t\\n\\v\\f\\r"`,
everything else is symbol class. Bytes are decoded one per character
(latin-1), so one byte is always one character.
"""

import io
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Tuple

from tries.compressed_trie import PrefixTrie


logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\v\f\r")


class Category(IntEnum):
    END = 0
    USER = 1
    KEYWORD = 2
    SYMBOL = 3


# Values a trie node may carry for its literal to be reported by category
REGISTRABLE = (Category.KEYWORD, Category.SYMBOL)


@dataclass(frozen=True)
class Token:
    category: Category
    text: str

    def __repr__(self):
        return f"Token({self.category.name}, {self.text!r})"


## === Character classification === ##

def is_letter(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def is_alphanumeric(c: str) -> bool:
    return is_letter(c) or is_digit(c)


def is_space(c: str) -> bool:
    return c in WHITESPACE


def is_symbol(c: str) -> bool:
    return not (is_alphanumeric(c) or is_space(c))


def hit_word_boundary(p: Optional[str], c: str) -> bool:
    """True when `c` may not continue a token whose previous character is `p`.

    `p` is None for the first character of a token, which never crosses a
    boundary.
    """
    if p is None:
        return False
    if is_space(c):
        return True
    return is_alphanumeric(p) != is_alphanumeric(c)


## === Byte source === ##

class ByteStream:
    """Peekable, pushback-capable character cursor.

    Accepts `str`, `bytes`, `bytearray`, or an open text/binary file object.
    Binary data is decoded one byte per character.
    """

    __slots__ = ("_fp", "_pushback")

    def __init__(self, source):
        if isinstance(source, str):
            source = io.StringIO(source)
        elif isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        elif not hasattr(source, "read"):
            raise TypeError(
                f"ByteStream needs str, bytes or a readable file, got {type(source).__name__}"
            )
        self._fp = source
        self._pushback: List[str] = []

    def _read(self) -> str:
        ch = self._fp.read(1)
        if isinstance(ch, bytes):
            return ch.decode("latin-1")
        return ch

    def peek(self) -> str:
        """Next character without consuming it ("" at end of stream)."""
        if not self._pushback:
            ch = self._read()
            if not ch:
                return ""
            self._pushback.append(ch)
        return self._pushback[-1]

    def get(self) -> str:
        """Consume and return one character ("" at end of stream)."""
        if self._pushback:
            return self._pushback.pop()
        return self._read()

    def unget(self, ch: str) -> None:
        """Push `ch` back so the next `get` returns it."""
        if ch:
            self._pushback.append(ch)

    def at_end(self) -> bool:
        return self.peek() == ""


## === Tokenizer === ##

class Tokenizer:
    """Scans character streams against a fully built, read-only `PrefixTrie`.

    The tokenizer keeps no per-stream state; the stream is the cursor, so one
    instance (and its trie) can serve any number of streams.
    """

    def __init__(self, trie: PrefixTrie):
        self.trie = trie

    @classmethod
    def from_registrations(cls, pairs: Iterable[Tuple[str, Category]]) -> "Tokenizer":
        """Build a tokenizer from ordered `(literal, category)` pairs.

        Only KEYWORD and SYMBOL may be registered. A literal registered twice
        keeps the category of its last registration.
        """
        trie = PrefixTrie()
        entries = []
        for literal, category in pairs:
            category = Category(category)
            if category not in REGISTRABLE:
                raise ValueError(
                    f"only KEYWORD and SYMBOL literals can be registered, got {category.name} for {literal!r}"
                )
            entries.append((literal, [category]))
        trie.batch_insert(entries)
        logger.debug("tokenizer built from %d registrations", len(entries))
        return cls(trie)

    def _stops_symbol(self, exact, c: str) -> bool:
        # The text so far is a registered symbol and no longer symbol
        # continues it with `c`.
        if exact is None or not exact.values or exact.values[0] != Category.SYMBOL:
            return False
        if self.trie.is_terminal(exact):
            return True
        return self.trie.find_partial(c, exact) is None

    def next_token(self, stream: ByteStream) -> Token:
        """Scan and return the next token; END once the stream is exhausted."""
        while is_space(stream.peek()):
            stream.get()
        if stream.at_end():
            return Token(Category.END, "")

        find_exact = self.trie.find_exact
        text = ""
        p = None
        while True:
            c = stream.get()
            if not c:
                break
            if hit_word_boundary(p, c) or self._stops_symbol(find_exact(text), c):
                stream.unget(c)
                break
            text += c
            p = c

        node = find_exact(text)
        if node is not None and node.values and node.values[0] in REGISTRABLE:
            return Token(Category(node.values[0]), text)
        return Token(Category.USER, text)

    def tokens(self, source) -> Iterator[Token]:
        """Yield every token of `source`, ending with exactly one END."""
        stream = source if isinstance(source, ByteStream) else ByteStream(source)
        while True:
            tok = self.next_token(stream)
            yield tok
            if tok.category == Category.END:
                return

    def tokenize(self, source) -> List[Token]:
        return list(self.tokens(source))
