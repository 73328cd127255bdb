# ==================================================
# id_pack/segments.py
# ==================================================
"""
Spaces / range / bitmap segment stream.

An encoded string is a run of segments, each a one character prefix
followed by a base-K number:

    _n   n absent id slots
    ~n   n present ids
    .n   n written in binary, msb first: 1 = present, 0 = absent

[5, 6, 21, 23, 25] encodes as "_F~C_P.V": five spaces, a range of two,
fifteen spaces, then the bitmap 10101 for 21, 23 and 25.

Small runs that sit close together are buffered and folded into one
bitmap as long as they fit inside ``window_size`` slots, which caps a
bitmap value at 2**window_size - 1.
"""
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple

from .base_k import decode_int, encode_int, from_binary_digits, to_binary_digits
from .const import (BITMAP_PREFIX, ENCODED_NUMBER_CHARS, MAX_DECODED_IDS, PREFIXES,
                    RANGE_PREFIX, SPACES_PREFIX, WINDOW_SIZE)
from .errors import CorruptedToken, InvalidInput
from .ranges import Run, runs_to_bits


class Segment(NamedTuple):
    prefix: str
    value: int

    def render(self, alphabet: str = ENCODED_NUMBER_CHARS) -> str:
        return self.prefix + encode_int(self.value, alphabet)


def _flush(group: Sequence[Run]) -> Segment:
    if len(group) == 1:
        return Segment(RANGE_PREFIX, group[0].size)
    return Segment(BITMAP_PREFIX, from_binary_digits(runs_to_bits(group)))


# -------- encoder --------------------------------------------------------

def iter_segments(runs: Iterable[Run], window_size: int = WINDOW_SIZE) -> Iterator[Segment]:
    """Turn ascending, non-adjacent runs into segments.

    ``group`` holds the runs waiting to be folded into one bitmap; an
    empty group means the encoder is idle. The spaces count is taken
    against the previous run's *end*, so it is one larger than the real
    gap; the decoder compensates for that.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise InvalidInput(f"window_size must be a positive integer, got {window_size!r}")

    prev_end = 0
    group: List[Run] = []
    for run in runs:
        gap, prev_end = run.start - prev_end, run.end

        if group:
            span = run.end - group[0].start + 1
            if span < window_size:
                group.append(run)
                continue
            if span == window_size:
                group.append(run)
                yield _flush(group)
                group = []
                continue
            # overshoot: close the window, then treat run as if idle
            yield _flush(group)
            group = []

        yield Segment(SPACES_PREFIX, gap)
        if run.size >= window_size:
            yield Segment(RANGE_PREFIX, run.size)
        else:
            group = [run]

    if group:
        yield _flush(group)


def encode_runs(runs: Iterable[Run], window_size: int = WINDOW_SIZE,
                alphabet: str = ENCODED_NUMBER_CHARS) -> str:
    return "".join(seg.render(alphabet) for seg in iter_segments(runs, window_size))


# -------- decoder --------------------------------------------------------

def parse_segments(encoded: str, alphabet: str = ENCODED_NUMBER_CHARS) -> Iterator[Segment]:
    # anything before the first prefix has no segment to belong to
    prefix = None
    digits: List[str] = []
    for ch in encoded:
        if ch in PREFIXES:
            if prefix is not None:
                yield Segment(prefix, decode_int("".join(digits), alphabet))
            prefix, digits = ch, []
        else:
            digits.append(ch)
    if prefix is not None:
        yield Segment(prefix, decode_int("".join(digits), alphabet))


def resolve_segment(prefix: str, value: int, start_id: int) -> Tuple[List[int], int]:
    """Expand one segment placed at ``start_id``.

    Returns ``(ids, end_id)``:

        "_", 4, 1    -> ([], 4)
        "~", 2, 5    -> ([5, 6], 6)
        ".", 21, 21  -> ([21, 23, 25], 25)
    """
    if prefix == SPACES_PREFIX:
        return [], start_id + value - 1
    if prefix == RANGE_PREFIX:
        return list(range(start_id, start_id + value)), start_id + value - 1
    if prefix == BITMAP_PREFIX:
        bits = to_binary_digits(value)
        ids = [start_id + i for i, bit in enumerate(bits) if bit == "1"]
        return ids, start_id + len(bits) - 1
    raise CorruptedToken(f"unknown segment prefix {prefix!r}")


def decode_ids(encoded: str, alphabet: str = ENCODED_NUMBER_CHARS,
               max_ids: int = MAX_DECODED_IDS) -> List[int]:
    """Inverse of encode_runs over the id values. Raises on corruption.

    Spaces only move the cursor, so any count is fine there; ranges and
    bitmaps are refused once they would expand past ``max_ids`` ids.
    """
    ids: List[int] = []
    end_id = None
    for seg in parse_segments(encoded, alphabet):
        if end_id is None:
            start_id = 0
        elif seg.prefix == SPACES_PREFIX:
            start_id = end_id
        else:
            start_id = end_id + 1
        if start_id < 0:
            raise CorruptedToken("segment cursor went below zero")
        if seg.prefix == RANGE_PREFIX:
            width = seg.value
        elif seg.prefix == BITMAP_PREFIX:
            width = seg.value.bit_length()
        else:
            width = 0
        if len(ids) + width > max_ids:
            raise CorruptedToken(f"token expands past {max_ids} ids")
        found, end_id = resolve_segment(seg.prefix, seg.value, start_id)
        ids.extend(found)
    return ids
