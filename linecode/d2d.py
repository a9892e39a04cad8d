from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from utils import SimResult, V_HIGH, V_LOW, V_ZERO, bits_from_string, count_ignored_chars, hold_last
from timeline import make_time_axis, time_step

logger = logging.getLogger(__name__)


class Scheme(str, Enum):
    NRZ_L = "NRZ-L"
    NRZ_I = "NRZ-I"
    BIPOLAR = "Bipolar"
    PSEUDOTERNARY = "Pseudoternary"
    MANCHESTER = "Manchester"
    DIFF_MANCHESTER = "Differential Manchester"


Transform = Callable[[List[int]], List[int]]


@dataclass(frozen=True)
class SchemeDescriptor:
    scheme: Scheme
    transform: Transform
    samples_per_bit: int      # 1 for level schemes, 2 for Manchester family


# ---------- Fold machinery ----------

Step = Callable[[Any, int], Tuple[Any, Tuple[int, ...]]]


def _fold(bits: List[int], step: Step, init: Any) -> List[int]:
    # Thread per-call state through the bits; state never escapes this call
    state = init
    out: List[int] = []
    for b in bits:
        state, emitted = step(state, b)
        out.extend(emitted)
    return hold_last(out)


def _toggle(level: int) -> int:
    return V_ZERO if level == V_HIGH else V_HIGH


# ---------- Step functions ----------

def _nrzl_step(state: None, b: int) -> Tuple[None, Tuple[int, ...]]:
    return state, (V_HIGH if b == 1 else V_ZERO,)


def _nrzi_step(level: int, b: int) -> Tuple[int, Tuple[int, ...]]:
    if b == 1:
        level = _toggle(level)  # a '1' is a change of level
    return level, (level,)


def _ami_step(last: int, b: int) -> Tuple[int, Tuple[int, ...]]:
    if b == 0:
        return last, (V_ZERO,)
    last = -last
    return last, (last,)


def _pseudoternary_step(positive: bool, b: int) -> Tuple[bool, Tuple[int, ...]]:
    # Pulses on '0', alternating polarity; '1' is the zero level
    if b == 1:
        return positive, (V_ZERO,)
    positive = not positive
    return positive, (V_HIGH if positive else V_LOW,)


def _manchester_step(state: None, b: int) -> Tuple[None, Tuple[int, ...]]:
    # 1 = low->high, 0 = high->low
    if b == 1:
        return state, (V_ZERO, V_HIGH)
    return state, (V_HIGH, V_ZERO)


def _diff_manchester_step(level: int, b: int) -> Tuple[int, Tuple[int, ...]]:
    # Convention: 0 => transition at start; 1 => no transition at start.
    if b == 0:
        level = _toggle(level)
    first = level
    level = _toggle(level)  # always mid-bit transition
    return level, (first, level)


# ---------- Transforms ----------

def nrzl(bits: List[int]) -> List[int]:
    return _fold(bits, _nrzl_step, None)


def nrzi(bits: List[int], start_level: int = V_ZERO) -> List[int]:
    return _fold(bits, _nrzi_step, start_level)


def bipolar_ami(bits: List[int], last_pulse_init: int = V_HIGH) -> List[int]:
    """Alternate Mark Inversion.

    ``last_pulse_init`` is the polarity of the mark assumed to precede the
    sequence, so with the default the first '1' goes out at -5 V.
    """
    return _fold(bits, _ami_step, last_pulse_init)


def pseudoternary(bits: List[int], last_zero_positive: bool = False) -> List[int]:
    return _fold(bits, _pseudoternary_step, last_zero_positive)


def manchester(bits: List[int]) -> List[int]:
    return _fold(bits, _manchester_step, None)


def diff_manchester(bits: List[int], start_level: int = V_HIGH) -> List[int]:
    return _fold(bits, _diff_manchester_step, start_level)


# ---------- Registry ----------

SCHEMES: Dict[Scheme, SchemeDescriptor] = {
    Scheme.NRZ_L: SchemeDescriptor(Scheme.NRZ_L, nrzl, 1),
    Scheme.NRZ_I: SchemeDescriptor(Scheme.NRZ_I, nrzi, 1),
    Scheme.BIPOLAR: SchemeDescriptor(Scheme.BIPOLAR, bipolar_ami, 1),
    Scheme.PSEUDOTERNARY: SchemeDescriptor(Scheme.PSEUDOTERNARY, pseudoternary, 1),
    Scheme.MANCHESTER: SchemeDescriptor(Scheme.MANCHESTER, manchester, 2),
    Scheme.DIFF_MANCHESTER: SchemeDescriptor(Scheme.DIFF_MANCHESTER, diff_manchester, 2),
}

SCHEME_LABELS: List[str] = [s.value for s in Scheme]


def parse_scheme(name: Union[str, Scheme]) -> Scheme:
    if isinstance(name, Scheme):
        return name
    for s in Scheme:
        if s.value == name:
            return s
    raise ValueError(f"Unknown scheme: {name}")


def resolve_scheme(name: Union[str, Scheme, None]) -> Optional[Scheme]:
    """Boundary parse for raw labels: unknown names become ``None``."""
    try:
        return parse_scheme(name)
    except ValueError:
        logger.warning("Unknown scheme %r, nothing to encode", name)
        return None


def get_descriptor(scheme: Union[str, Scheme]) -> SchemeDescriptor:
    return SCHEMES[parse_scheme(scheme)]


# ---------- Public API ----------

def line_encode(bits: List[int], scheme: Union[str, Scheme]) -> Tuple[List[int], Dict[str, Any]]:
    s = resolve_scheme(scheme)
    if s is None:
        return [], {"scheme": None, "samples_per_bit": None}

    desc = SCHEMES[s]
    samples = desc.transform(bits)
    logger.debug("%s: %d bits -> %d samples", s.value, len(bits), len(samples))
    return samples, {"scheme": s.value, "samples_per_bit": desc.samples_per_bit}


def simulate_d2d(text: str, scheme: Union[str, Scheme]) -> SimResult:
    bits = bits_from_string(text)
    ignored = count_ignored_chars(text)
    if ignored:
        logger.debug("Read %d non-binary character(s) as '0'", ignored)

    tx, meta_tx = line_encode(bits, scheme)
    spb = meta_tx["samples_per_bit"]

    if spb is None:
        t = np.array([], dtype=float)
        step = None
    else:
        t = make_time_axis(len(tx), spb)
        step = time_step(spb)

    meta = {
        "scheme": meta_tx["scheme"],
        "samples_per_bit": spb,
        "time_step": step,
        "input_len": len(bits),
        "sample_count": len(tx),
        "ignored_chars": ignored,
    }
    return SimResult(
        t=t,
        signals={"tx": np.asarray(tx, dtype=float)},
        bits={"input": bits},
        meta=meta,
    )
