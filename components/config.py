import json
import logging
from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

from components.tokenizer import Category, Tokenizer


logger = logging.getLogger(__name__)


## === Default C-like profile === ##

DEFAULT_KEYWORDS = [
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if", "int",
    "long", "register", "return", "short", "signed", "sizeof", "static",
    "struct", "switch", "typedef", "union", "unsigned", "void", "volatile",
    "while",
]

DEFAULT_SYMBOLS = [
    # Grouping / punctuation
    "(", ")", "{", "}", "[", "]", ";", ",", ".", "?", ":", "#",
    # Arithmetic
    "+", "-", "*", "/", "%", "++", "--",
    # Comparison / logic
    "=", "==", "!", "!=", "<", "<=", ">", ">=", "&&", "||",
    # Bitwise
    "&", "|", "^", "~", "<<", ">>",
    # Compound assignment
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=",
    # Member access / variadics
    "->", "...",
]


## === Config Class === ##

@dataclass
class LexerConfig:
    """
    Registration lists for a Tokenizer
        keywords: list, literals registered as KEYWORD
        symbols: list, literals registered as SYMBOL (registered after the
            keywords, so a literal in both lists ends up a SYMBOL)
    """
    keywords: List[str] = field(default_factory=list)
    symbols: List[str] = field(default_factory=list)

    def __post_init__(self):
        for name in ("keywords", "symbols"):
            items = getattr(self, name)
            if isinstance(items, str) or not isinstance(items, (list, tuple)):
                raise ValueError(f"{name} must be a list of strings")
            bad = [w for w in items if not isinstance(w, str) or not w]
            if bad:
                raise ValueError(f"{name} must hold non-empty strings, got {bad!r}")
            setattr(self, name, list(items))

    @classmethod
    def from_dict(cls, data: dict) -> "LexerConfig":
        if not isinstance(data, dict):
            raise ValueError("lexer config must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown lexer config keys: {unknown}")
        return cls(**data)

    @classmethod
    def from_json(cls, path) -> "LexerConfig":
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}: invalid JSON ({e})") from e
        config = cls.from_dict(data)
        logger.debug("loaded %s: %d keywords, %d symbols",
                     path, len(config.keywords), len(config.symbols))
        return config

    def registrations(self) -> List[Tuple[str, Category]]:
        pairs = [(w, Category.KEYWORD) for w in self.keywords]
        pairs.extend((s, Category.SYMBOL) for s in self.symbols)
        return pairs


DEFAULT_CONFIG = LexerConfig(keywords=DEFAULT_KEYWORDS, symbols=DEFAULT_SYMBOLS)


def build_tokenizer(config: Optional[LexerConfig] = None) -> Tokenizer:
    if config is None:
        config = DEFAULT_CONFIG
    return Tokenizer.from_registrations(config.registrations())
