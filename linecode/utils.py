from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import numpy as np

# Line voltages (V)
V_HIGH = 5
V_ZERO = 0
V_LOW = -5

DEFAULT_BITS = "10110010"
RANDOM_BITS_RANGE = (8, 256)


@dataclass
class SimResult:
    t: np.ndarray
    signals: Dict[str, np.ndarray]     # named waveforms
    bits: Dict[str, List[int]]         # named bit lists
    meta: Dict[str, Any]               # intermediate details


def bits_from_string(bitstr: str) -> List[int]:
    # Permissive: only '1' is a one, every other character reads as zero
    if not bitstr:
        return []
    return [1 if c == "1" else 0 for c in bitstr]


def count_ignored_chars(bitstr: str) -> int:
    return sum(1 for c in (bitstr or "") if c not in "01")


def bits_to_string(bits: List[int]) -> str:
    return "".join("1" if b else "0" for b in bits)


def gen_random_bits(n: int, seed: Optional[int] = None) -> List[int]:
    if n < 0:
        raise ValueError("Number of bits must be non-negative.")
    rng = np.random.default_rng(seed)
    return [int(x) for x in rng.integers(0, 2, size=n)]


def hold_last(samples: List[int]) -> List[int]:
    # Repeat the final level so it stays visible for one more time unit
    if not samples:
        return samples
    samples.append(samples[-1])
    return samples


def parse_seed(seed_txt: str) -> Optional[int]:
    s = (seed_txt or "").strip()
    if s == "":
        return None
    if s == "-" or not s.lstrip("-").isdigit():
        raise ValueError("Seed must be an integer.")
    return int(s)
