# ==================================================
# id_pack/cli.py
# ==================================================
import argparse
import sys

from .errors import InvalidInput
from .packer import IdPacker, PackerConfig


def _id_ts(pair: str):
    key, sep, ts = pair.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ID=TIMESTAMP, got {pair!r}")
    try:
        return key, int(ts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"timestamp in {pair!r} is not an integer") from None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="id-pack", description="Pack id sets into short tokens.")
    sub = p.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="encode ids into a token")
    enc.add_argument("ids", nargs="*", type=int)
    enc.add_argument("--window-size", type=int)
    enc.add_argument("--alphabet")

    dec = sub.add_parser("decode", help="decode a token into ids")
    dec.add_argument("token")
    dec.add_argument("--alphabet")

    senc = sub.add_parser("sync-encode", help="encode ID=TIMESTAMP pairs")
    senc.add_argument("pairs", nargs="+", type=_id_ts)

    sdec = sub.add_parser("sync-decode", help="decode a sync string")
    sdec.add_argument("sync_str")
    sdec.add_argument("--base-timestamp", type=int, default=0)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        packer = IdPacker(PackerConfig.from_env())
        if args.command == "encode":
            print(packer.encode(args.ids, window_size=args.window_size, alphabet=args.alphabet))
        elif args.command == "decode":
            print(" ".join(map(str, packer.decode(args.token, alphabet=args.alphabet))))
        elif args.command == "sync-encode":
            print(packer.encode_sync(dict(args.pairs)))
        else:
            for key, ts in packer.decode_sync(args.sync_str, args.base_timestamp).items():
                print(f"{key}={ts}")
    except InvalidInput as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
