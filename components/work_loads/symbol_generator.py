import random
import math


## Symbol-class characters (no letters, digits or whitespace)
SYMBOL_CHARS = "!#$%&*+-./:<=>?@^|~"
MAX_SYMBOLS = 5_000


def _p_eff_log(x, max_mean=100) -> float:
  # Logarithmic mapping of prefix frequency to effective prefix frequency
  if x < 0 or x >= 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_symbol_set(num_symbols, prefix_freq=0.0, seed=None, max_len=4):
  """Generates a list of distinct symbol literals with a given prefix frequency.
  A higher prefix_freq means more symbols extend an already generated symbol
  by one character, which builds deeper, more branched tries.
  Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  """
  if num_symbols < 1 or num_symbols > MAX_SYMBOLS:
    raise ValueError(f"num_symbols must be between 1 and {MAX_SYMBOLS}")
  if max_len < 1:
    raise ValueError("max_len must be positive")
  capacity = sum(len(SYMBOL_CHARS) ** i for i in range(1, max_len + 1))
  if num_symbols > capacity:
    raise ValueError(f"only {capacity} distinct symbols exist up to length {max_len}")
  p_eff = _p_eff_log(prefix_freq)
  rng = random.Random(seed)

  out = []
  seen = set()
  while len(out) < num_symbols:
    if out and rng.random() < p_eff:
      candidate = rng.choice(out) + rng.choice(SYMBOL_CHARS)
      if len(candidate) > max_len:
        continue
    else:
      length = rng.randint(1, max_len)
      candidate = "".join(rng.choice(SYMBOL_CHARS) for _ in range(length))
    if candidate in seen:
      continue
    seen.add(candidate)
    out.append(candidate)
  return out
