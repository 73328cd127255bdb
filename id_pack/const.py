# ==================================================
# id_pack/const.py
# ==================================================
import string

SPACES_PREFIX = "_"       # n absent id slots
RANGE_PREFIX  = "~"       # n present ids
BITMAP_PREFIX = "."       # explicit 1/0 pattern, msb first
PREFIXES      = (SPACES_PREFIX, RANGE_PREFIX, BITMAP_PREFIX)

WINDOW_SIZE   = 10        # max bits in one bitmap segment
EXCLUDE_NULL  = True      # drop mapping keys whose value is None

# A-Z a-z 0-9 - (63 symbols)
ENCODED_NUMBER_CHARS = (string.ascii_uppercase + string.ascii_lowercase
                        + string.digits + "-")
# token alphabets, must never hold SYNC_DELIMITER
LZ_URI_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+-$"
URI_SAFE_CHARS = ENCODED_NUMBER_CHARS + "_"

SYNC_DELIMITER = ","
UUID_HEX_LEN   = 32
UUID_GROUPS    = (8, 4, 4, 4, 12)

ZSTD_LEVEL     = 3
TOKEN_SENTINEL = b"\x01"  # keeps leading zero bytes through int conversion

MAX_DECODED_IDS = 10_000_000  # a token expanding past this is corrupt
