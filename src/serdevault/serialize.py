"""Value <-> bytes codecs used by VaultFile.

The vault core only talks to the ``Serializer`` protocol; ``JsonSerializer``
is the default implementation. Passing a ``cls`` to ``loads`` validates the
JSON into that type (dataclasses, pydantic models, ``dict[int, str]``, ...)
through a pydantic ``TypeAdapter``.
"""
import dataclasses
import json

from typing import Any, Protocol, runtime_checkable

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from serdevault.errors import DeserializationError, SerializationError


@runtime_checkable
class Serializer(Protocol):
    def dumps(self, value: Any) -> bytes: ...

    def loads(self, data: bytes | bytearray, cls: Any = None) -> Any: ...


def _to_builtin(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _describe(err: ValidationError) -> str:
    # input values are left out: they are decrypted plaintext
    parts = []
    for detail in err.errors(include_url=False, include_input=False):
        loc = ".".join(str(p) for p in detail["loc"]) or "$"
        parts.append(f"{loc}: {detail['msg']}")
    return "; ".join(parts)


class JsonSerializer:
    """Compact UTF-8 JSON."""

    def dumps(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, default=_to_builtin, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SerializationError(str(e)) from e
        return text.encode("utf-8")

    def loads(self, data: bytes | bytearray, cls: Any = None) -> Any:
        if cls is None:
            try:
                return json.loads(data)
            except (UnicodeDecodeError, ValueError) as e:
                raise DeserializationError(str(e)) from e
        try:
            return TypeAdapter(cls).validate_json(data)
        except ValidationError as e:
            raise DeserializationError(_describe(e)) from None
        except (PydanticUserError, NameError) as e:
            raise DeserializationError(f"cannot build a validator for {cls!r}: {e}") from e
