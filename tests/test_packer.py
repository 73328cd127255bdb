"""
Unit tests for id_pack/packer.py and the package level api.
"""
import random
import time

import pytest

import id_pack
from id_pack import IdPacker, PackerConfig, decode, encode
from id_pack.const import ENCODED_NUMBER_CHARS
from id_pack.errors import InvalidAlphabet, InvalidInput


def random_id_sets(seed=1234, count=25):
    rng = random.Random(seed)
    for _ in range(count):
        size = rng.randint(1, 300)
        spread = rng.choice([10, 100, 1000, 10**6])
        yield {rng.randrange(spread) for _ in range(size)}


# -------- concrete vectors -----------------------------------------------

def test_encode_concrete_vector():
    assert encode([5, 6, 21, 23, 25]) == "_F~C_P.V"


def test_decode_concrete_vector():
    assert decode("_F~C_P.V") == [5, 6, 21, 23, 25]


def test_encode_ignores_order_and_duplicates():
    assert encode([25, 5, 23, 6, 21, 6]) == "_F~C_P.V"


def test_empty():
    assert encode([]) == ""
    assert encode(set()) == ""
    assert decode("") == []


def test_singleton_zero():
    assert decode(encode({0})) == [0]


def test_timestamp_sized_id():
    ts = int(time.time() * 1000)
    assert decode(encode([ts])) == [ts]


@pytest.mark.parametrize("i", range(10))
def test_powers_of_ten(i):
    assert decode(encode([10**i])) == [10**i]


def test_ids_beyond_64_bits():
    ids = {2**63, 2**64 + 5, 2**64 + 6, 2**80}
    assert decode(encode(ids)) == sorted(ids)


# -------- round trips ----------------------------------------------------

@pytest.mark.parametrize("window_size", [1, 2, 10, 1000])
def test_round_trip_window_sizes(window_size):
    for ids in random_id_sets():
        assert decode(encode(ids, window_size=window_size)) == sorted(ids)


@pytest.mark.parametrize("alphabet", ["01", "xyz", "0123456789", ENCODED_NUMBER_CHARS, "!@#$%^&*()"])
def test_round_trip_custom_alphabets(alphabet):
    for ids in random_id_sets(seed=99, count=10):
        token = encode(ids, alphabet=alphabet)
        assert decode(token, alphabet=alphabet) == sorted(ids)


def test_dense_block_round_trip():
    ids = set(range(1000, 5000)) | {7, 9, 11, 6000}
    assert decode(encode(ids)) == sorted(ids)


# -------- mapping input --------------------------------------------------

def test_mapping_keys_are_ids():
    assert encode({5: "a", 6: "b", 21: "c", 23: "d", 25: "e"}) == "_F~C_P.V"


def test_mapping_excludes_null_values_by_default():
    collection = {5: "a", 6: "b", 7: None}
    assert encode(collection) == encode([5, 6])
    assert encode(collection, exclude_null=False) == encode([5, 6, 7])


def test_mapping_with_only_null_values():
    assert encode({1: None, 2: None}) == ""


def test_mapping_with_string_keys():
    assert encode({"5": 1, "6": 1, "21": 1, "23": 1, "25": 1}) == "_F~C_P.V"


def test_mapping_with_bad_key():
    with pytest.raises(InvalidInput):
        encode({"five": 1})


# -------- errors ---------------------------------------------------------

@pytest.mark.parametrize("bad", [[-1], [1.5], ["a"], [None]])
def test_encode_invalid_ids_raise(bad):
    with pytest.raises(InvalidInput):
        encode(bad)


def test_encode_invalid_window_size():
    with pytest.raises(InvalidInput):
        encode([1], window_size=0)


@pytest.mark.parametrize("alphabet", ["a", "aab", "ab_", "ab~", "ab."])
def test_encode_invalid_alphabet(alphabet):
    with pytest.raises(InvalidAlphabet):
        encode([1], alphabet=alphabet)


@pytest.mark.parametrize("bad", ["@@@invalid@@@", "_F~C_P.@", "_A_A~B", "~!", None])
def test_decode_corrupted_returns_empty(bad):
    assert decode(bad) == []


def test_decode_with_wrong_alphabet_is_fail_soft():
    token = encode([5, 6, 21], alphabet="xyz")
    assert decode(token, alphabet="01") == []


# -------- config ---------------------------------------------------------

def test_default_config():
    cfg = PackerConfig()
    assert cfg.window_size == 10
    assert cfg.alphabet == ENCODED_NUMBER_CHARS
    assert cfg.exclude_null is True


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        PackerConfig().window_size = 3


def test_config_from_env():
    cfg = PackerConfig.from_env({
        "ID_PACK_WINDOW_SIZE": "4",
        "ID_PACK_ALPHABET": "0123456789",
        "ID_PACK_EXCLUDE_NULL": "off",
    })
    assert cfg == PackerConfig(window_size=4, alphabet="0123456789", exclude_null=False)


def test_config_from_env_defaults(monkeypatch):
    for name in ("ID_PACK_WINDOW_SIZE", "ID_PACK_ALPHABET", "ID_PACK_EXCLUDE_NULL"):
        monkeypatch.delenv(name, raising=False)
    assert PackerConfig.from_env() == PackerConfig()


def test_config_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("ID_PACK_WINDOW_SIZE", "3")
    assert PackerConfig.from_env().window_size == 3


def test_config_from_env_bad_window_size():
    with pytest.raises(InvalidInput):
        PackerConfig.from_env({"ID_PACK_WINDOW_SIZE": "ten"})


def test_packer_uses_its_config():
    packer = IdPacker(PackerConfig(window_size=1, alphabet="0123456789"))
    assert packer.encode([5, 6, 21]) == "_5~2_15~1"
    assert packer.decode("_5~2_15~1") == [5, 6, 21]


def test_per_call_arguments_override_config():
    packer = IdPacker(PackerConfig(alphabet="0123456789"))
    assert packer.encode([5, 6, 21, 23, 25], alphabet=ENCODED_NUMBER_CHARS) == "_F~C_P.V"


def test_packer_sync_round_trip_with_injected_compressor(plain_compressor):
    packer = IdPacker(compressor=plain_compressor)
    s = packer.encode_sync({1: 5, 2: 9})
    assert s == "5,1,0,2,4"
    assert packer.decode_sync(s, 10) == {1: 15, 2: 19}


def test_module_level_sync_api():
    m = {3: 1000, 4: 1000, 99: 2000}
    assert id_pack.decode_sync(id_pack.encode_sync(m)) == m


@pytest.mark.parametrize("bad", ["~" + "-" * 11, "~" + "-" * 5, "_F~C_P~" + "-" * 8])
def test_decode_oversized_token_returns_empty(bad):
    """A token that would expand into billions of ids decodes to nothing."""
    assert decode(bad) == []
