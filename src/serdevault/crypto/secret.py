"""Owned buffer for key material and plaintext that is zeroed on release."""


class SecretBuffer:
    """Mutable copy of secret bytes that overwrites itself when released.

    Use it as a context manager so the wipe runs on normal return and on
    exceptions alike. Immutable ``bytes`` handed to the constructor are copied;
    only the copy can be wiped.
    """

    __slots__ = ("_buf",)

    def __init__(self, data: bytes | bytearray | memoryview = b""):
        self._buf = bytearray(data)

    @classmethod
    def from_text(cls, text: str) -> "SecretBuffer":
        """UTF-8 encode ``text`` straight into an owned buffer, with no bytes copy."""
        obj = cls.__new__(cls)
        obj._buf = bytearray(text, "utf-8")
        return obj

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __del__(self):
        self.wipe()

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        return f"<SecretBuffer len={len(self._buf)} redacted>"

    @property
    def data(self) -> bytearray:
        """The live buffer. Do not keep references past the owning scope."""
        return self._buf

    @property
    def wiped(self) -> bool:
        return not self._buf

    def wipe(self) -> None:
        buf = getattr(self, "_buf", None)
        if not buf:
            return
        # slice assignment of equal length writes in place, no reallocation
        buf[:] = bytes(len(buf))
        try:
            buf.clear()
        except BufferError:
            # a live memoryview pins the size; contents are already zero
            pass
