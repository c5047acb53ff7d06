"""
json_to_toon.py - Public API of the JSON <-> TOON codec.

    from json_to_toon import encode, decode

    encode({"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]})
    # users[2]{id,name}:
    #   1,Alice
    #   2,Bob
"""

from toon_converter import ToonConverter
from toon_decoder import ToonDecoder, decode
from toon_encoder import ToonEncoder, encode
from toon_values import (
    DEPTH_LIMIT_DEFAULT,
    Kind,
    ToonDecodeError,
    ToonDepthError,
    ToonError,
    ToonTypeError,
    kind_of,
)

__version__ = "0.1.0"

__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "Kind",
    "ToonConverter",
    "ToonDecodeError",
    "ToonDecoder",
    "ToonDepthError",
    "ToonEncoder",
    "ToonError",
    "ToonTypeError",
    "decode",
    "encode",
    "kind_of",
]
