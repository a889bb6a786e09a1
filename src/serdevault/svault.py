#!/usr/bin/env python3
"""
svault: command line front end for serdevault files.

A vault file holds one JSON value encrypted under a passphrase. The commands
below treat it as a key/value object, except `put`/`show` which work on the
whole value.

Commands:
  init <vault>                 Create a vault holding {}
  put <vault> <json|->         Store a JSON document
  set <vault> <key> <value>    Set a key
  get <vault> <key>            Print a key
  rm <vault> <key>             Remove a key
  rename <vault> <key> <name>  Rename a key
  ls <vault>                   List keys
  show <vault>                 Print the decrypted value
  info <vault>                 Print header fields, no passphrase needed

Rewrites keep the Argon2id parameters recorded in the existing file.
"""
from __future__ import annotations

import logging
import sys

from serdevault.errors import SerdeVaultError
from serdevault.ui.cli import build_parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except SerdeVaultError as e:
        print(f"[!] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
