"""Query string parameters."""

from urllib.parse import parse_qsl

from perch._internal.multimap import MultiValueMap


class QueryParams(MultiValueMap):
    """Parsed query string. Blank values are kept (``?flag=`` → ``""``)."""

    __slots__ = ("_raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    @property
    def raw(self) -> bytes:
        """The query string exactly as received."""
        return self._raw
