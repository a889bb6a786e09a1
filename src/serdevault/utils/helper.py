import json
import os
import sys

from pathlib import Path
from typing import Any


def expand_home(path: str | os.PathLike) -> Path:
    """Expand a leading ``~`` from $HOME; without HOME the path is left literal."""
    s = os.fspath(path)
    if s == "~" or s.startswith("~/"):
        home = os.environ.get("HOME")
        if home:
            return Path(home) / s[2:] if len(s) > 1 else Path(home)
    return Path(s)


def parse_value(raw: str) -> Any:
    """CLI values: JSON if it parses, otherwise the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def read_json_input(src: str) -> Any:
    text = sys.stdin.read() if src == "-" else Path(src).read_text(encoding="utf-8")
    return json.loads(text)
