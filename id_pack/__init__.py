from .base_k import decode_int, encode_int, to_binary_digits
from .compression import (LZStringTokenCompressor, TokenCompressor,
                          ZstdTokenCompressor)
from .errors import (CorruptedToken, IdPackError, InvalidAlphabet,
                     InvalidInput, InvalidSymbol)
from .packer import (IdPacker, PackerConfig, decode, decode_sync, encode,
                     encode_sync)
from .ranges import Run, extract_runs
from .segments import decode_ids, encode_runs, iter_segments, resolve_segment

__all__ = [
    "IdPacker", "PackerConfig", "encode", "decode", "encode_sync", "decode_sync",
    "TokenCompressor", "LZStringTokenCompressor", "ZstdTokenCompressor",
    "encode_int", "decode_int", "to_binary_digits",
    "Run", "extract_runs", "iter_segments", "encode_runs", "decode_ids",
    "resolve_segment",
    "IdPackError", "InvalidInput", "InvalidAlphabet", "InvalidSymbol",
    "CorruptedToken",
]
