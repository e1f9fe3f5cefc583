"""Request headers, decoded from the ASGI scope's byte pairs."""

from collections.abc import Iterable

from perch._internal.multimap import MultiValueMap


class Headers(MultiValueMap):
    """Case-insensitive header mapping. Names iterate lowercased.

    ``headers["Accept"]`` is the first value sent; repeated headers are
    available through ``get_list``.
    """

    __slots__ = ()

    @classmethod
    def from_raw(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        """Build from ASGI ``(name, value)`` byte pairs."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @staticmethod
    def _fold(key: str) -> str:
        return key.lower()
