import argparse

from serdevault.utils.core import cmd_get, cmd_info, cmd_init, cmd_ls, cmd_put, cmd_set, cmd_show
from serdevault.utils.dataModels import DEFAULT_T_COST, DEFAULT_M_COST_KiB, DEFAULT_PARALLELISM
from serdevault.utils.maintain import cmd_rename, cmd_rm


def _add_kdf_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-t", type=int, default=DEFAULT_T_COST, help="Argon2 time cost (iterations)")
    p.add_argument("-m", type=int, default=DEFAULT_M_COST_KiB, help="Argon2 memory (KiB)")
    p.add_argument("-p", type=int, default=DEFAULT_PARALLELISM, help="Argon2 parallelism")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="svault", description="Password-encrypted single-value vault")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a vault holding an empty object")
    p_init.add_argument("vault", help="Path to vault file")
    p_init.add_argument("--passphrase", required=True)
    _add_kdf_args(p_init)
    p_init.add_argument("--force", action="store_true", help="Overwrite an existing vault")
    p_init.set_defaults(func=cmd_init)

    p_put = sub.add_parser("put", help="Store a JSON document (file or - for stdin)")
    p_put.add_argument("vault", help="Path to vault file")
    p_put.add_argument("input", help="JSON file, or - to read stdin")
    p_put.add_argument("--passphrase", required=True)
    _add_kdf_args(p_put)
    p_put.set_defaults(func=cmd_put)

    p_set = sub.add_parser("set", help="Set a key (value parsed as JSON, else kept as string)")
    p_set.add_argument("vault", help="Path to vault file")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument("--passphrase", required=True)
    p_set.set_defaults(func=cmd_set)

    p_get = sub.add_parser("get", help="Print one key")
    p_get.add_argument("vault", help="Path to vault file")
    p_get.add_argument("key")
    p_get.add_argument("--passphrase", required=True)
    p_get.set_defaults(func=cmd_get)

    p_rm = sub.add_parser("rm", help="Remove a key")
    p_rm.add_argument("vault", help="Path to vault file")
    p_rm.add_argument("key")
    p_rm.add_argument("--passphrase", required=True)
    p_rm.set_defaults(func=cmd_rm)

    p_ren = sub.add_parser("rename", help="Rename a key")
    p_ren.add_argument("vault", help="Path to vault file")
    p_ren.add_argument("key")
    p_ren.add_argument("name", help="New key name")
    p_ren.add_argument("--passphrase", required=True)
    p_ren.add_argument("--force", action="store_true", help="Overwrite an existing key")
    p_ren.set_defaults(func=cmd_rename)

    p_ls = sub.add_parser("ls", help="List keys")
    p_ls.add_argument("vault", help="Path to vault file")
    p_ls.add_argument("--passphrase", required=True)
    p_ls.set_defaults(func=cmd_ls)

    p_show = sub.add_parser("show", help="Print the whole decrypted value")
    p_show.add_argument("vault", help="Path to vault file")
    p_show.add_argument("--passphrase", required=True)
    p_show.set_defaults(func=cmd_show)

    p_info = sub.add_parser("info", help="Print header fields (no passphrase needed)")
    p_info.add_argument("vault", help="Path to vault file")
    p_info.set_defaults(func=cmd_info)

    return p
