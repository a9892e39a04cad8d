"""Sample-to-time projection for encoded waveforms.

Level schemes emit one sample per bit and are laid out on whole time units
starting at t=1. Manchester-family schemes emit two samples per bit and are
laid out on half units starting at t=0. The axis labels halve even-integer
positions for the two-sample case so they read as bit numbers.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np


def _check_spb(samples_per_bit: int) -> int:
    spb = int(samples_per_bit)
    if spb not in (1, 2):
        raise ValueError(f"samples_per_bit must be 1 or 2, got {samples_per_bit}")
    return spb


def time_step(samples_per_bit: int) -> float:
    return 1.0 / _check_spb(samples_per_bit)


def time_origin(samples_per_bit: int) -> float:
    return 1.0 if _check_spb(samples_per_bit) == 1 else 0.0


def make_time_axis(num_samples: int, samples_per_bit: int) -> np.ndarray:
    return time_origin(samples_per_bit) + np.arange(num_samples, dtype=float) * time_step(samples_per_bit)


def project_timeline(samples: Sequence[float], samples_per_bit: int) -> List[Tuple[float, float]]:
    t = make_time_axis(len(samples), samples_per_bit)
    return [(float(ti), v) for ti, v in zip(t, samples)]


def tick_label(value: float, samples_per_bit: int) -> str:
    if not float(value).is_integer():
        return ""
    n = int(value)
    if _check_spb(samples_per_bit) == 2:
        return str(n // 2) if n % 2 == 0 else ""
    return str(n)


def x_ticks(t: Sequence[float], samples_per_bit: int) -> Tuple[List[float], List[str]]:
    vals = [float(v) for v in t]
    return vals, [tick_label(v, samples_per_bit) for v in vals]
