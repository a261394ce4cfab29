#!/usr/bin/env python3
import argparse
import json
import os
import sys
from typing import Dict, Iterator, Tuple

from .bitstream_utils import BitOrder
from .digest_utils import MD5Context
from .huffman_utils import HuffmanCode, decode_symbols


def iter_meta_files(root: str) -> Iterator[str]:
    for dirpath, _, filenames in os.walk(root):
        for name in sorted(filenames):
            if name.startswith("bitstream_meta_") and name.endswith(".json"):
                yield os.path.join(dirpath, name)


def load_json(path: str) -> Dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def decode_file(meta_path: str) -> Tuple[Dict, bytes]:
    meta = load_json(meta_path)
    huff_path = os.path.join(os.path.dirname(meta_path), meta["huff_file"])
    with open(huff_path, "rb") as f:
        payload = f.read()
    code = HuffmanCode(meta["symbol_lists"])
    order = BitOrder[meta.get("bit_order", "msb").upper()]
    symbols = decode_symbols(payload, code, int(meta["num_symbols"]), order)
    return meta, bytes(symbols)


def main() -> int:
    parser = argparse.ArgumentParser(description="Decode Huffman bitstreams and optionally verify MD5.")
    parser.add_argument("--bitstream-dir", required=True, help="Directory containing bitstream outputs.")
    parser.add_argument("--out-dir", default="", help="Write decoded files here (optional).")
    parser.add_argument("--verify", action="store_true", help="Compare MD5 of decoded bytes with the meta.")
    args = parser.parse_args()

    meta_files = list(iter_meta_files(args.bitstream_dir))
    if not meta_files:
        print(f"No bitstream_meta_*.json found under {args.bitstream_dir}", file=sys.stderr)
        return 1

    checked = 0
    failed = 0

    for meta_path in meta_files:
        try:
            meta, data = decode_file(meta_path)
        except (OSError, KeyError, ValueError) as exc:
            print(f"Error {meta_path}: {exc}", file=sys.stderr)
            failed += 1
            continue

        if args.out_dir:
            rel_dir = os.path.relpath(os.path.dirname(meta_path), args.bitstream_dir)
            dst_dir = os.path.normpath(os.path.join(args.out_dir, rel_dir))
            os.makedirs(dst_dir, exist_ok=True)
            with open(os.path.join(dst_dir, os.path.basename(meta["source_file"])), "wb") as f:
                f.write(data)

        if args.verify and MD5Context().consume(data).finalize().hex() != meta.get("md5"):
            print(f"Mismatch: {meta_path}", file=sys.stderr)
            failed += 1
            continue
        checked += 1

    print(f"Checked: {checked}, Failed: {failed}")
    return 0 if failed == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())
