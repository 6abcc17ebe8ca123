#!/usr/bin/env python
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import numpy as np

from wkbflat.config import load_bounds_policy, parse_max_elements
from wkbflat.encoding import FlatCoordsCodec, coerce_byte_order
from wkbflat.errors import WKBError
from wkbflat.models import ByteOrder


def _ensure_parent(path: str | os.PathLike[str]) -> None:
    parent = Path(path).expanduser().parent
    if parent != Path('.'):
        parent.mkdir(parents=True, exist_ok=True)


def _byte_order_arg(value: str) -> ByteOrder:
    try:
        return coerce_byte_order(value)
    except (ValueError, WKBError) as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _ends_key(level: int) -> str | None:
    return {2: "ends", 3: "endss"}.get(level)


def _document_from_block(codec: FlatCoordsCodec, level: int, flat_coords: np.ndarray, ends: Any) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "byte_order": codec.byte_order.order_id,
        "stride": codec.stride,
        "level": level,
        "flat_coords": flat_coords.tolist(),
    }
    key = _ends_key(level)
    if key is not None:
        doc[key] = ends
    return doc


def _add_encode_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--json", required=True, help="Input JSON document with flat_coords and ends.")
    sub.add_argument("--out", required=True, help="Output binary file path.")
    sub.add_argument("--byte-order", type=_byte_order_arg, default=None, help="Override the document's byte order (0/1, xdr/ndr).")


def _add_decode_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--bin", required=True, help="Input binary file path.")
    sub.add_argument("--level", type=int, required=True, choices=[0, 1, 2, 3], help="Nesting level of the block.")
    sub.add_argument("--stride", type=int, required=True, help="Scalars per coordinate tuple.")
    sub.add_argument("--byte-order", type=_byte_order_arg, default=ByteOrder.native(), help="Byte order (0/1, xdr/ndr). Defaults to the host order.")
    sub.add_argument("--max-elements", type=parse_max_elements, default=None, help="Limits for levels 0..3, e.g. '0,1048576,32768,1024'.")
    sub.add_argument("--out", default=None, help="Output JSON path (stdout when omitted).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wkbflat", description="WKB flat-coordinate encode/decode CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Encode a JSON document into a binary block.")
    _add_encode_arguments(encode_parser)

    decode_parser = subparsers.add_parser("decode", help="Decode a binary block into a JSON document.")
    _add_decode_arguments(decode_parser)

    return parser


def _run_encode(args: argparse.Namespace) -> None:
    doc = json.loads(Path(args.json).read_text(encoding="utf-8"))
    level = int(doc["level"])
    byte_order = args.byte_order if args.byte_order is not None else coerce_byte_order(doc.get("byte_order", "ndr"))
    codec = FlatCoordsCodec(byte_order=byte_order, stride=int(doc["stride"]))
    key = _ends_key(level)
    ends = doc.get(key) if key is not None else None
    if key is not None and ends is None:
        raise ValueError(f"Level-{level} document requires '{key}'.")

    _ensure_parent(args.out)
    with open(args.out, "wb") as handle:
        codec.write(handle, level, doc["flat_coords"], ends)
    print(f"[encode] wrote {args.out}")


def _run_decode(args: argparse.Namespace) -> None:
    policy = args.max_elements if args.max_elements is not None else load_bounds_policy()
    codec = FlatCoordsCodec(byte_order=args.byte_order, stride=args.stride, policy=policy)
    with open(args.bin, "rb") as handle:
        flat_coords, ends = codec.read(handle, args.level)
        trailing = len(handle.read())
    if trailing:
        print(f"[decode] {trailing} trailing bytes ignored", file=sys.stderr)

    text = json.dumps(_document_from_block(codec, args.level, flat_coords, ends))
    if args.out is None:
        print(text)
        return
    _ensure_parent(args.out)
    Path(args.out).write_text(text, encoding="utf-8")
    print(f"[decode] wrote {args.out}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "encode":
            _run_encode(args)
        elif args.command == "decode":
            _run_decode(args)
        else:
            parser.error(f"Unknown command: {args.command}")
    except (WKBError, EOFError) as exc:
        print(f"[{args.command}] error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
