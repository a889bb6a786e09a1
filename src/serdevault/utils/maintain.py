import argparse
import sys

from serdevault.utils.core import unlock_mapping


def cmd_rm(args: argparse.Namespace) -> None:
    vault, data = unlock_mapping(args.vault, args.passphrase)
    if args.key not in data:
        print(f"[!] No such key: {args.key}", file=sys.stderr)
        sys.exit(1)
    del data[args.key]
    vault.save(data)
    print(f"[+] Removed {args.key}")


def cmd_rename(args: argparse.Namespace) -> None:
    vault, data = unlock_mapping(args.vault, args.passphrase)
    if args.key not in data:
        print(f"[!] No such key: {args.key}", file=sys.stderr)
        sys.exit(1)
    if args.name in data and not args.force:
        print(f"[!] {args.name} already exists. Use --force to overwrite.", file=sys.stderr)
        sys.exit(1)
    data[args.name] = data.pop(args.key)
    vault.save(data)
    print(f"[+] Renamed {args.key} -> {args.name}")
