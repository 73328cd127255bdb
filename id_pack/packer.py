# ==================================================
# id_pack/packer.py
# ==================================================
import logging
import os
from dataclasses import asdict, dataclass, replace
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Union

from .base_k import as_uint, check_alphabet
from .compression import LZStringTokenCompressor, TokenCompressor
from .const import ENCODED_NUMBER_CHARS, EXCLUDE_NULL, PREFIXES, WINDOW_SIZE
from .errors import IdPackError, InvalidInput
from .ranges import extract_runs
from .segments import decode_ids, encode_runs
from .sync import Id, decode_sync as _decode_sync, encode_sync as _encode_sync

log = logging.getLogger(__name__)

_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class PackerConfig:
    window_size:  int  = WINDOW_SIZE
    alphabet:     str  = ENCODED_NUMBER_CHARS
    exclude_null: bool = EXCLUDE_NULL

    def __post_init__(self):
        ws = self.window_size
        if isinstance(ws, bool) or not isinstance(ws, int) or ws < 1:
            raise InvalidInput(f"window_size must be a positive integer, got {ws!r}")
        check_alphabet(self.alphabet, reserved="".join(PREFIXES))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PackerConfig":
        env = os.environ if environ is None else environ
        kw = {}
        if env.get("ID_PACK_WINDOW_SIZE"):
            try:
                kw["window_size"] = int(env["ID_PACK_WINDOW_SIZE"])
            except ValueError:
                raise InvalidInput("ID_PACK_WINDOW_SIZE must be an integer") from None
        if env.get("ID_PACK_ALPHABET"):
            kw["alphabet"] = env["ID_PACK_ALPHABET"]
        if env.get("ID_PACK_EXCLUDE_NULL"):
            kw["exclude_null"] = env["ID_PACK_EXCLUDE_NULL"].strip().lower() not in _FALSY
        return cls(**kw)

    def as_dict(self) -> dict:
        return asdict(self)


def _mapping_keys(collection: Mapping, exclude_null: bool) -> List[int]:
    # JSON objects hand us "5" rather than 5
    keys = []
    for key, value in collection.items():
        if exclude_null and value is None:
            continue
        if isinstance(key, str):
            try:
                key = int(key, 10)
            except ValueError:
                raise InvalidInput(f"mapping key {key!r} is not an integer id") from None
        keys.append(as_uint(key))
    return keys


class IdPacker:
    """Id set / sync string codec bound to one config and compressor."""

    def __init__(self, config: Optional[PackerConfig] = None,
                 compressor: Optional[TokenCompressor] = None):
        self.config     = config or PackerConfig()
        self.compressor = compressor or LZStringTokenCompressor()

    # ------------------------------------------------------------------
    def encode(self, ids: Union[Iterable[int], Mapping],
               window_size: Optional[int] = None,
               exclude_null: Optional[bool] = None,
               alphabet: Optional[str] = None) -> str:
        """[5, 6, 21, 23, 25] -> "_F~C_P.V"

        ``ids`` may also be a mapping, in which case its keys are the ids.
        Per-call arguments override the packer's config.
        """
        cfg = self.config
        overrides = {k: v for k, v in (("window_size", window_size),
                                       ("exclude_null", exclude_null),
                                       ("alphabet", alphabet)) if v is not None}
        if overrides:
            cfg = replace(cfg, **overrides)

        if isinstance(ids, Mapping):
            ids = _mapping_keys(ids, cfg.exclude_null)
        return encode_runs(extract_runs(ids), cfg.window_size, cfg.alphabet)

    def decode(self, encoded: str, alphabet: Optional[str] = None) -> List[int]:
        """Inverse of encode: "_F~C_P.V" -> [5, 6, 21, 23, 25].

        Never raises on a bad token; corrupted input decodes to [].
        """
        if alphabet is None:
            alphabet = self.config.alphabet
        else:
            check_alphabet(alphabet, reserved="".join(PREFIXES))
        if not isinstance(encoded, str):
            return []
        try:
            ids = decode_ids(encoded, alphabet)
        except (IdPackError, OverflowError, MemoryError) as e:
            log.debug("discarding corrupted id token %.40r: %s", encoded, e)
            return []
        return sorted(set(ids))

    # ------------------------------------------------------------------
    def encode_sync(self, id_synced_at: Mapping[Hashable, int]) -> str:
        return _encode_sync(id_synced_at, self.compressor)

    def decode_sync(self, sync_str: str, base_timestamp: int = 0) -> Dict[Id, int]:
        return _decode_sync(sync_str, base_timestamp, self.compressor)


# -------- module level api -----------------------------------------------

_default = IdPacker()


def encode(ids, window_size=None, exclude_null=None, alphabet=None) -> str:
    return _default.encode(ids, window_size, exclude_null, alphabet)


def decode(encoded: str, alphabet: Optional[str] = None) -> List[int]:
    return _default.decode(encoded, alphabet)


def encode_sync(id_synced_at, compressor: Optional[TokenCompressor] = None) -> str:
    return _encode_sync(id_synced_at, compressor or _default.compressor)


def decode_sync(sync_str: str, base_timestamp: int = 0,
                compressor: Optional[TokenCompressor] = None) -> Dict[Id, int]:
    return _decode_sync(sync_str, base_timestamp, compressor or _default.compressor)
