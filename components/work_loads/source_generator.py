import random
from typing import List, Optional
from dataclasses import dataclass
from faker import Faker

from components.config import DEFAULT_CONFIG, LexerConfig

## === Config Class === ##

@dataclass
class SourceConfig:
    """
    Configuration for SourceGenerator
        keyword_share: float, proportion of pieces drawn from the keywords
        symbol_share: float, proportion of pieces drawn from the symbols
        number_share: float, proportion of integer literals
            (the rest are identifiers)
        space_share: float, probability of a space between two pieces
        pieces_per_line: int, pieces joined into one line
        seed: int, seed for random number generator
    """
    keyword_share: float = 0.2
    symbol_share: float = 0.35
    number_share: float = 0.1
    space_share: float = 0.6
    pieces_per_line: int = 8
    seed: Optional[int] = None

    def __post_init__(self):
        shares = (self.keyword_share, self.symbol_share, self.number_share)
        if any(s < 0 for s in shares):
            raise ValueError("shares must be non-negative")
        if sum(shares) > 1:
            raise ValueError("keyword_share + symbol_share + number_share must be <= 1")
        if not 0 <= self.space_share <= 1:
            raise ValueError("space_share must be between 0 and 1")
        if self.pieces_per_line <= 0:
            raise ValueError("pieces_per_line must be positive")


class SourceGenerator:
    def __init__(self, config: SourceConfig, lexer: LexerConfig = DEFAULT_CONFIG):
        self.config = config
        self.lexer = lexer
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)

    def _identifier(self):
        word = self.fake.word()
        if self.rng.random() < 0.25:
            word += str(self.rng.randint(0, 99))
        return word

    def _piece(self):
        cfg = self.config
        r = self.rng.random()
        if r < cfg.keyword_share:
            if self.lexer.keywords:
                return self.rng.choice(self.lexer.keywords)
        elif r < cfg.keyword_share + cfg.symbol_share:
            if self.lexer.symbols:
                return self.rng.choice(self.lexer.symbols)
        elif r < cfg.keyword_share + cfg.symbol_share + cfg.number_share:
            return str(self.fake.pyint(min_value=0, max_value=9999))
        return self._identifier()

    def line(self):
        parts = [self._piece()]
        for _ in range(self.config.pieces_per_line - 1):
            if self.rng.random() < self.config.space_share:
                parts.append(" ")
            parts.append(self._piece())
        return "".join(parts)

    def batch(self, n) -> List[str]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.line() for _ in range(n)]
