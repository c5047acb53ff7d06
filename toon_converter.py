# toon_converter.py
# JSON <-> TOON facade and command-line converter
#
# =============================================================================
#  FACADE
# =============================================================================
#
# ToonConverter pairs one ToonEncoder (carrying the indent setting) with one
# ToonDecoder (carrying the strict setting). Each method forwards to one of
# them; JSON text goes through the standard json module.
#
# Running this file converts a single file and writes the result to stdout:
#   0 on success, 1 on a codec error, malformed JSON, or an unreadable file.
# =============================================================================

import argparse
import logging
import sys
from typing import List

from toon_decoder import ToonDecoder
from toon_encoder import ToonEncoder
from toon_values import DEPTH_LIMIT_DEFAULT, INDENT_DEFAULT

TOON_SUFFIX = ".toon"

# ---------------------------------------------------------------------------
# CONVERTER
# ---------------------------------------------------------------------------
class ToonConverter:
    """
    Encoder/decoder pair sharing one configuration.

    >>> ToonConverter().json_to_toon('{"name":"Alice","age":30}')
    'name: Alice\\nage: 30'
    """

    def __init__(self, indent: str = INDENT_DEFAULT, *, strict: bool = False, max_depth: int = DEPTH_LIMIT_DEFAULT):
        self._encoder = ToonEncoder(indent, max_depth=max_depth)
        self._decoder = ToonDecoder(strict=strict, max_depth=max_depth)

    @property
    def encoder(self) -> ToonEncoder:
        return self._encoder

    @property
    def decoder(self) -> ToonDecoder:
        return self._decoder

    def to_toon(self, value) -> str:
        return self._encoder.encode(value)

    def json_to_toon(self, json_text: str) -> str:
        return self._encoder.encode_from_json(json_text)

    def from_toon(self, toon_text: str):
        return self._decoder.decode(toon_text)

    def toon_to_json(self, toon_text: str) -> str:
        return self._decoder.decode_to_json(toon_text)

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Convert one file. JSON input is encoded to TOON; --decode, or a .toon
    file name, decodes TOON to compact JSON.
    """
    ap = argparse.ArgumentParser(description="JSON <-> TOON converter")
    ap.add_argument("file", help="JSON file to encode, or TOON file to decode")
    ap.add_argument("--decode", action="store_true", help="read FILE as TOON and print JSON")
    ap.add_argument("--indent", type=int, default=len(INDENT_DEFAULT), help="spaces per nesting level")
    ap.add_argument("--tabs", action="store_true", help="indent with tabs instead of spaces")
    ap.add_argument("--strict", action="store_true", help="reject lines lenient decoding would skip")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--debug", action="store_true", help="log skipped lines and dropped rows to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    indent = "\t" if args.tabs else " " * args.indent
    converter = ToonConverter(indent, strict=args.strict, max_depth=args.max_depth)
    decoding = args.decode or args.file.endswith(TOON_SUFFIX)

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            data = fh.read()
        out = converter.toon_to_json(data) if decoding else converter.json_to_toon(data)
    except (OSError, ValueError) as exc:
        # ToonError and json.JSONDecodeError are both ValueError subclasses
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    print(out)
    return 0


def main() -> int:
    return _cli(sys.argv[1:])

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
