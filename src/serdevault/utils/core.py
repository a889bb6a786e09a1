import argparse
import json
import sys

from typing import Any, Dict, Tuple

from serdevault.storage.vault import read_header
from serdevault.utils.dataModels import HEADER_SIZE, TAG_SIZE, FORMAT_VERSION
from serdevault.utils.helper import expand_home, parse_value, read_json_input
from serdevault.vault import VaultFile


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def unlock_mapping(path: str, passphrase: str) -> Tuple[VaultFile, Dict[str, Any]]:
    """Decrypt a vault holding an object; the next save reuses its cost parameters."""
    vault = VaultFile(path, passphrase)
    data, header = vault.load_with_header()
    vault.with_params(*header.kdf_params.as_tuple())
    if not isinstance(data, dict):
        print(f"[!] {vault.path} does not hold a JSON object", file=sys.stderr)
        sys.exit(1)
    return vault, data


def cmd_init(args: argparse.Namespace) -> None:
    vault = VaultFile(args.vault, args.passphrase).with_params(args.m, args.t, args.p)
    if vault.exists() and not args.force:
        print(f"[!] {vault.path} exists. Use --force to overwrite.", file=sys.stderr)
        sys.exit(1)
    vault.save({})
    print(f"[+] Initialized vault at {vault.path}")


def cmd_put(args: argparse.Namespace) -> None:
    try:
        value = read_json_input(args.input)
    except (OSError, ValueError) as e:
        print(f"[!] Cannot read JSON from {args.input}: {e}", file=sys.stderr)
        sys.exit(1)
    vault = VaultFile(args.vault, args.passphrase).with_params(args.m, args.t, args.p)
    vault.save(value)
    print(f"[+] Stored value in {vault.path}")


def cmd_set(args: argparse.Namespace) -> None:
    vault, data = unlock_mapping(args.vault, args.passphrase)
    data[args.key] = parse_value(args.value)
    vault.save(data)
    print(f"[+] Set {args.key}")


def cmd_get(args: argparse.Namespace) -> None:
    _, data = unlock_mapping(args.vault, args.passphrase)
    if args.key not in data:
        print(f"[!] No such key: {args.key}", file=sys.stderr)
        sys.exit(1)
    value = data[args.key]
    print(value if isinstance(value, str) else _dump(value))


def cmd_ls(args: argparse.Namespace) -> None:
    _, data = unlock_mapping(args.vault, args.passphrase)
    if not data:
        print("(empty)")
        return
    for key in sorted(data):
        print(f"{key}\t{type(data[key]).__name__}")


def cmd_show(args: argparse.Namespace) -> None:
    vault = VaultFile(args.vault, args.passphrase)
    print(_dump(vault.load()))


def cmd_info(args: argparse.Namespace) -> None:
    path = expand_home(args.vault)
    header = read_header(path)
    size = path.stat().st_size
    m, t, p = header.kdf_params.as_tuple()
    print(f"path\t{path}")
    print(f"version\t{FORMAT_VERSION}")
    print(f"argon2id\tm={m} KiB t={t} p={p}")
    print(f"size\t{size} bytes")
    print(f"payload\t{max(size - HEADER_SIZE - TAG_SIZE, 0)} bytes")
