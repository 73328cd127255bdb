# ==================================================
# id_pack/compression.py
# ==================================================
from typing import Protocol

import zstandard as zstd
from lzstring import LZString

from .base_k import check_alphabet, decode_int, encode_int
from .const import (LZ_URI_CHARS, SYNC_DELIMITER, TOKEN_SENTINEL, URI_SAFE_CHARS,
                    ZSTD_LEVEL)
from .errors import CorruptedToken

_lz = LZString()

# -------- zstd wrappers ---------------------------------------------------
# contexts are built per call; a shared ZstdCompressor is not safe to use
# from several threads at once

def compress(data: bytes, level: int = ZSTD_LEVEL) -> bytes:
    return zstd.ZstdCompressor(level=level).compress(data)

def decompress(data: bytes) -> bytes:
    return zstd.ZstdDecompressor().decompress(data)


# -------- text token compressors -----------------------------------------

class TokenCompressor(Protocol):
    def compress(self, text: str) -> str: ...
    def decompress(self, token: str) -> str: ...


class ZstdTokenCompressor:
    """str -> zstd frame -> base-K token over a caller supplied alphabet.

    The frame bytes are read as one big-endian integer behind a 0x01
    sentinel byte so leading zero bytes survive the trip, then written
    with the same positional codec the id segments use.
    """
    def __init__(self, alphabet: str = URI_SAFE_CHARS, level: int = ZSTD_LEVEL):
        self.alphabet = check_alphabet(alphabet, reserved=SYNC_DELIMITER)
        self.level    = level

    def compress(self, text: str) -> str:
        raw = TOKEN_SENTINEL + compress(text.encode("utf-8"), self.level)
        return encode_int(int.from_bytes(raw, "big"), self.alphabet)

    def decompress(self, token: str) -> str:
        n = decode_int(token, self.alphabet)
        raw = n.to_bytes((n.bit_length() + 7) // 8, "big")
        if not raw.startswith(TOKEN_SENTINEL):
            raise CorruptedToken("token is missing its sentinel byte")
        try:
            return decompress(raw[len(TOKEN_SENTINEL):]).decode("utf-8")
        except (zstd.ZstdError, UnicodeDecodeError) as e:
            raise CorruptedToken(f"undecodable token: {e}") from e

    def __repr__(self):
        return f"{type(self).__name__}(alphabet={self.alphabet!r}, level={self.level})"


class LZStringTokenCompressor:
    """LZ-string ``compressToEncodedURIComponent`` tokens.

    Same token format the browser's lz-string produces, over the fixed
    alphabet A-Z a-z 0-9 + - $ (no comma). Default compressor for sync
    strings.
    """
    alphabet = LZ_URI_CHARS

    def compress(self, text: str) -> str:
        return _lz.compressToEncodedURIComponent(text)

    def decompress(self, token: str) -> str:
        try:
            text = _lz.decompressFromEncodedURIComponent(token)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise CorruptedToken(f"undecodable token: {e!r}") from e
        if text is None:
            raise CorruptedToken("undecodable token")
        return text

    def __repr__(self):
        return f"{type(self).__name__}()"
