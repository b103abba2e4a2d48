from __future__ import annotations
import argparse, json, sys

from .binary.iobuffer import IOBuffer
from .binary.reader import LayoutError, load_buffer, parse_layout, read_record
from .binary.storage import OutOfBoundsAccess
from .log import log, setup_logging
from .models.config import BufferConfig


def _open_view(args) -> IOBuffer:
    """Load the input and derive the --floor/--ceil window from it."""
    root = load_buffer(args.input, BufferConfig(text_encoding=args.encoding))
    if args.floor is None and args.ceil is None:
        return root
    return root.derive(args.floor if args.floor is not None else root.floor, args.ceil)


def cmd_info(args):
    view = _open_view(args)
    print(json.dumps(view.state().model_dump(mode="json"), indent=2))
    return 0


def cmd_peek(args):
    fields = parse_layout(args.field)
    view = _open_view(args)
    if args.at is not None:
        view.seek(args.at)
    record = read_record(view, fields)
    log.debug("read %d field(s), cursor now at %d", len(fields), view.pos)
    print(json.dumps(record, indent=2))
    return 0


def _hexdump_lines(view: IOBuffer, width: int):
    while view.pos < view.ceil:
        offset = view.pos
        row = view.read_array(min(width, view.ceil - offset))
        hexs = " ".join(f"{b:02x}" for b in row).ljust(width * 3 - 1)
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in row)
        yield f"{offset:08x}  {hexs}  |{text}|"


def cmd_hexdump(args):
    if args.width <= 0:
        raise ValueError(f"--width must be positive, got {args.width}")
    view = _open_view(args)
    for line in _hexdump_lines(view, args.width):
        print(line)
    return 0


def _add_window_args(sp):
    sp.add_argument("input", help="Path to a binary file")
    sp.add_argument("--floor", type=lambda s: int(s, 0), default=None, help="Lower bound of the view (inclusive)")
    sp.add_argument("--ceil", type=lambda s: int(s, 0), default=None, help="Upper bound of the view (exclusive)")
    sp.add_argument("--encoding", default="latin-1", help="Single-byte text encoding for string fields")


def build_parser():
    p = argparse.ArgumentParser(prog="iobuf", description="Bounded binary buffer utilities")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print the view's bounds and cursor as JSON")
    _add_window_args(sp)
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("peek", help="decode typed fields at an offset")
    _add_window_args(sp)
    sp.add_argument("--at", type=lambda s: int(s, 0), default=None, help="Absolute offset to seek to first")
    sp.add_argument("--field", action="append", required=True,
                    help="Field as name:kind[:count], e.g. magic:string:4 or size:u32be (repeatable)")
    sp.set_defaults(func=cmd_peek)

    sp = sub.add_parser("hexdump", help="hex/ASCII dump of the view")
    _add_window_args(sp)
    sp.add_argument("--width", type=int, default=16, help="Bytes per line")
    sp.set_defaults(func=cmd_hexdump)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    setup_logging(ns.verbose)
    try:
        return ns.func(ns)
    except (OutOfBoundsAccess, LayoutError, ValueError, OSError) as e:
        print(f"iobuf: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
