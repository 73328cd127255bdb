# ==================================================
# id_pack/base_k.py
# ==================================================
from functools import lru_cache
from numbers import Integral

from .const import ENCODED_NUMBER_CHARS
from .errors import InvalidAlphabet, InvalidInput, InvalidSymbol


def check_alphabet(alphabet: str, reserved: str = "") -> str:
    """Validate a symbol alphabet and return it unchanged.

    The alphabet needs at least two symbols, no duplicates, and none of
    the characters in ``reserved`` (prefixes or field delimiters that
    would make the output ambiguous).
    """
    if not isinstance(alphabet, str) or len(alphabet) < 2:
        raise InvalidAlphabet("alphabet needs at least 2 symbols")
    if len(set(alphabet)) != len(alphabet):
        raise InvalidAlphabet(f"duplicate symbols in alphabet {alphabet!r}")
    clash = sorted(set(alphabet) & set(reserved))
    if clash:
        raise InvalidAlphabet(f"alphabet may not contain {''.join(clash)!r}")
    return alphabet


def as_uint(n) -> int:
    # bool is an Integral too; True is not an id
    if isinstance(n, bool) or not isinstance(n, Integral) or n < 0:
        raise InvalidInput(f"expected a non-negative integer, got {n!r}")
    return int(n)


@lru_cache(maxsize=32)
def _symbol_index(alphabet: str) -> dict:
    return {ch: i for i, ch in enumerate(alphabet)}


# -------- positional base-K ----------------------------------------------

def encode_int(n, alphabet: str = ENCODED_NUMBER_CHARS) -> str:
    """5 -> "F" with the default alphabet; 0 is always ``alphabet[0]``."""
    n = as_uint(n)
    base = len(alphabet)
    out = []
    while True:
        n, digit = divmod(n, base)
        out.append(alphabet[digit])
        if not n:
            break
    return "".join(reversed(out))


def decode_int(s: str, alphabet: str = ENCODED_NUMBER_CHARS) -> int:
    """Inverse of encode_int: "ABC" -> 65 with the default alphabet.

    Every character is checked against the alphabet; this is where a
    corrupted token is first noticed.
    """
    index = _symbol_index(alphabet)
    base = len(alphabet)
    n = 0
    for ch in s:
        digit = index.get(ch)
        if digit is None:
            raise InvalidSymbol(f"symbol {ch!r} is not in the alphabet")
        n = n * base + digit
    return n


# -------- binary helpers -------------------------------------------------

def to_binary_digits(n: int) -> str:
    # 21 -> "10101"; a bitmap value of 0 carries no bits at all
    return format(n, "b") if n else ""


def from_binary_digits(bits: str) -> int:
    return int(bits, 2) if bits else 0
