# ==================================================
# id_pack/ranges.py
# ==================================================
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from .base_k import as_uint

_UINT64_MAX = np.iinfo(np.uint64).max


@dataclass(frozen=True)
class Run:
    """Inclusive interval of consecutive present ids."""
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1


# -------- run extraction -------------------------------------------------

def extract_runs(ids: Iterable[int]) -> List[Run]:
    """[1, 2, 3, 6, 7, 8] -> [Run(1, 3), Run(6, 8)]

    Input order and duplicates do not matter. Ids that fit in 64 bits
    are handled as a uint64 array; anything larger falls back to an
    object array of Python ints.
    """
    values = [as_uint(i) for i in ids]
    if not values:
        return []
    dtype = np.uint64 if max(values) <= _UINT64_MAX else object
    arr = np.unique(np.array(values, dtype=dtype))

    # a run breaks wherever two neighbours differ by more than one
    breaks = np.flatnonzero(np.diff(arr) != 1) + 1
    starts = np.concatenate(([0], breaks))
    ends = np.concatenate((breaks - 1, [len(arr) - 1]))
    return [Run(int(arr[s]), int(arr[e])) for s, e in zip(starts, ends)]


def runs_to_bits(runs: Sequence[Run]) -> str:
    # [Run(1, 3), Run(6, 8)] -> "11100111"
    out = []
    for i, run in enumerate(runs):
        if i:
            out.append("0" * (run.start - runs[i - 1].end - 1))
        out.append("1" * run.size)
    return "".join(out)
