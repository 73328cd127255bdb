import os
import sys

import pytest

# Make the flat-layout package and server.py importable without installing
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


class PlainCompressor:
    """Readable stand-in for the zstd compressor; only hides commas."""

    def compress(self, text):
        return text.replace(",", ";")

    def decompress(self, token):
        return token.replace(";", ",")


@pytest.fixture
def plain_compressor():
    return PlainCompressor()
