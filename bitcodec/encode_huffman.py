#!/usr/bin/env python3
import argparse
import json
import os
import sys
from typing import Dict, Iterator, List

import numpy as np

from .bitstream_utils import BitOrder
from .digest_utils import MD5Context
from .huffman_utils import HuffmanCode, encode_symbols


def iter_input_files(root: str) -> Iterator[str]:
    if os.path.isfile(root):
        yield root
        return
    for dirpath, _, filenames in os.walk(root):
        for name in sorted(filenames):
            yield os.path.join(dirpath, name)


def write_json(path: str, payload: Dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def byte_frequencies(data: bytes) -> Dict[int, int]:
    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    return {int(sym): int(c) for sym, c in enumerate(counts) if c > 0}


def encode_file(src_path: str, dst_dir: str, limit: int, order: BitOrder, fill: bool) -> Dict:
    with open(src_path, "rb") as f:
        data = f.read()
    symbols: List[int] = list(data)
    code = HuffmanCode.from_frequencies(byte_frequencies(data), limit)
    payload = encode_symbols(symbols, code, order, fill)
    payload_bits = sum(code.lookup(sym)[1] for sym in symbols)

    name = os.path.basename(src_path)
    huff_path = os.path.join(dst_dir, f"{name}.huff")
    with open(huff_path, "wb") as f:
        f.write(payload)

    return {
        "layout": "bitstream_huffman",
        "source_file": name,
        "huff_file": os.path.basename(huff_path),
        "num_symbols": len(symbols),
        "bit_order": order.name.lower(),
        "fill": bool(fill),
        "limit": limit,
        "symbol_lists": code.ordered_symbols(),
        "length_counts": code.length_counts(),
        "payload_bytes": len(payload),
        "payload_bits": payload_bits,
        "md5": MD5Context().consume(data).finalize().hex(),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Canonical Huffman encoding of byte files.")
    parser.add_argument("--input", required=True, help="Source file or directory.")
    parser.add_argument("--out-dir", default="out", help="Output directory.")
    parser.add_argument("--limit", type=int, default=0, help="Max code length (0 = no limit).")
    parser.add_argument("--bit-order", choices=["msb", "lsb"], default="msb")
    parser.add_argument("--fill", action="store_true", help="Pad the last byte with 1-bits.")
    parser.add_argument("--overwrite", action="store_true")
    args = parser.parse_args()

    files = list(iter_input_files(args.input))
    if not files:
        print(f"No input files found under {args.input}", file=sys.stderr)
        return 1

    order = BitOrder[args.bit_order.upper()]
    os.makedirs(args.out_dir, exist_ok=True)
    base = args.input if os.path.isdir(args.input) else os.path.dirname(args.input)

    encoded = 0
    skipped = 0
    errors = 0

    for src_path in files:
        rel_dir = os.path.relpath(os.path.dirname(src_path), base or ".")
        dst_dir = os.path.normpath(os.path.join(args.out_dir, rel_dir))
        os.makedirs(dst_dir, exist_ok=True)
        meta_path = os.path.join(dst_dir, f"bitstream_meta_{os.path.basename(src_path)}.json")

        if not args.overwrite and os.path.exists(meta_path):
            skipped += 1
            continue
        try:
            if os.path.getsize(src_path) == 0:
                print(f"Skip {src_path}: empty file", file=sys.stderr)
                skipped += 1
                continue
            meta = encode_file(src_path, dst_dir, args.limit, order, args.fill)
            write_json(meta_path, meta)
            encoded += 1
        except (OSError, ValueError) as exc:
            print(f"Error {src_path}: {exc}", file=sys.stderr)
            errors += 1

    print(f"Encoded: {encoded}")
    print(f"Skipped: {skipped}")
    if errors:
        print(f"Errors: {errors}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
