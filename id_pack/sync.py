# ==================================================
# id_pack/sync.py
# ==================================================
"""
Sync strings: {id: last_synced_at} packed as

    min_ts, ids_0, delta_0, ids_1, delta_1, ...

Every field is a compressor token. ``ids_i`` is the comma joined list of
ids sharing one timestamp (or the dash-stripped UUIDs run together) and
``delta_i`` is that timestamp minus ``min_ts`` in decimal.
"""
import logging
import re
from numbers import Integral
from typing import Dict, Hashable, List, Mapping, Optional, Tuple, Union

from .base_k import as_uint
from .compression import LZStringTokenCompressor, TokenCompressor
from .const import SYNC_DELIMITER, UUID_GROUPS, UUID_HEX_LEN
from .errors import CorruptedToken, InvalidInput

log = logging.getLogger(__name__)

Id = Union[int, str]

_INT_TEXT  = re.compile(r"0|[1-9][0-9]*")
_INT_LIST  = re.compile(r"(?:0|[1-9][0-9]*)(?:,(?:0|[1-9][0-9]*))*")
_UUID_TEXT = re.compile(r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?"
                        r"[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}")
_HEX_TEXT  = re.compile(r"[0-9a-fA-F]*")

_default_compressor = LZStringTokenCompressor()


# -------- id rendering helpers -------------------------------------------

def _normalize_id(key: Hashable) -> Id:
    """Integers (and their canonical decimal strings) become ints,
    UUID-shaped strings are kept as they are."""
    if isinstance(key, str):
        if _INT_TEXT.fullmatch(key):
            return int(key)
        if _UUID_TEXT.fullmatch(key):
            return key
        raise InvalidInput(f"id {key!r} is neither an integer nor a UUID")
    return as_uint(key)


def _join_ids(ids: List[Id]) -> str:
    if isinstance(ids[0], int):
        return SYNC_DELIMITER.join(str(i) for i in ids)
    return "".join(i.replace("-", "") for i in ids)


def _format_uuid(hex32: str) -> str:
    parts, pos = [], 0
    for width in UUID_GROUPS:
        parts.append(hex32[pos:pos + width])
        pos += width
    return "-".join(parts)


def _split_ids(text: str) -> List[Id]:
    if _INT_LIST.fullmatch(text):
        return [int(i) for i in text.split(SYNC_DELIMITER)]
    if len(text) % UUID_HEX_LEN or not _HEX_TEXT.fullmatch(text):
        raise CorruptedToken("id group is neither integers nor UUIDs")
    return [_format_uuid(text[i:i + UUID_HEX_LEN])
            for i in range(0, len(text), UUID_HEX_LEN)]


# -------- public api -----------------------------------------------------

def encode_sync(id_synced_at: Mapping[Hashable, int],
                compressor: Optional[TokenCompressor] = None) -> str:
    """Pack ``{id: last_synced_at}`` into one sync string.

    Ids sharing a timestamp travel as a single group, split in two when
    integer and UUID ids share it (both halves carry the same delta).
    Groups keep the order in which they first show up in the mapping.
    """
    comp = compressor or _default_compressor
    if not id_synced_at:
        return ""

    groups: Dict[Tuple[int, bool], List[Id]] = {}
    for key, synced_at in id_synced_at.items():
        if isinstance(synced_at, bool) or not isinstance(synced_at, Integral):
            raise InvalidInput(f"timestamp for {key!r} must be an integer, got {synced_at!r}")
        id_ = _normalize_id(key)
        groups.setdefault((int(synced_at), isinstance(id_, int)), []).append(id_)

    min_ts = min(synced_at for synced_at, _ in groups)
    fields = [comp.compress(str(min_ts))]
    for (synced_at, _), ids in groups.items():
        fields.append(comp.compress(_join_ids(ids)))
        fields.append(comp.compress(str(synced_at - min_ts)))
    return SYNC_DELIMITER.join(fields)


def _decode_sync(sync_str: str, base_timestamp: int, comp: TokenCompressor) -> Dict[Id, int]:
    head, *fields = sync_str.split(SYNC_DELIMITER)
    if len(fields) % 2:
        raise CorruptedToken("sync string has an unpaired field")
    min_ts = int(comp.decompress(head))

    result: Dict[Id, int] = {}
    for ids_token, delta_token in zip(fields[::2], fields[1::2]):
        ids = _split_ids(comp.decompress(ids_token))
        synced_at = min_ts + int(comp.decompress(delta_token)) + base_timestamp
        for i in ids:
            # overlapping groups: newest timestamp wins
            result[i] = max(result.get(i, synced_at), synced_at)
    return result


def decode_sync(sync_str: str, base_timestamp: int = 0,
                compressor: Optional[TokenCompressor] = None) -> Dict[Id, int]:
    """Unpack a sync string, shifting every timestamp by ``base_timestamp``.

    A malformed or stale string is not an error for the caller: it
    decodes to an empty mapping.
    """
    comp = compressor or _default_compressor
    if not sync_str:
        return {}
    try:
        return _decode_sync(sync_str, base_timestamp, comp)
    except Exception as e:
        log.debug("discarding corrupted sync string %.40r: %s", sync_str, e)
        return {}
