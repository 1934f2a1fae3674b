#!/usr/bin/env python3
from faker import Faker

from components.config import DEFAULT_CONFIG, LexerConfig
from components.work_loads.source_generator import SourceConfig, SourceGenerator
from components.work_loads.symbol_generator import gen_symbol_set

MAX_KEYWORDS = 100


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def keywords(self, num_keywords):
        if num_keywords < 0 or num_keywords > MAX_KEYWORDS:
            raise ValueError(f"num_keywords must be between 0 and {MAX_KEYWORDS}")
        fake = Faker()
        if self.seed is not None:
            fake.seed_instance(self.seed)
        return fake.words(nb=num_keywords, unique=True)

    def registrations(self, num_keywords=20, num_symbols=40, p_freq=0.0):
        return LexerConfig(
            keywords=self.keywords(num_keywords),
            symbols=gen_symbol_set(num_symbols, p_freq, self.seed),
        )

    def source(self, num_lines, lexer=DEFAULT_CONFIG, **config):
        gen = SourceGenerator(SourceConfig(seed=self.seed, **config), lexer)
        return "\n".join(gen.batch(num_lines))
