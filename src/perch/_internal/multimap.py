"""Read-only string mapping where a key may carry several values.

Shared base for Headers and QueryParams. Values are grouped once at
construction; lookups return the first value, ``get_list`` all of them.
"""

from collections.abc import Iterable, Iterator, Mapping


class MultiValueMap(Mapping[str, str]):
    __slots__ = ("_groups",)

    _groups: dict[str, tuple[str, ...]]

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        groups: dict[str, list[str]] = {}
        for key, value in pairs:
            groups.setdefault(self._fold(key), []).append(value)
        object.__setattr__(self, "_groups", {k: tuple(v) for k, v in groups.items()})

    @staticmethod
    def _fold(key: str) -> str:
        """Normalize a key before storage and lookup. Identity by default."""
        return key

    def __getitem__(self, key: str) -> str:
        return self._groups[self._fold(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v[0]!r}" for k, v in self._groups.items())
        return f"{type(self).__name__}({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Every value for *key*, in arrival order."""
        return list(self._groups.get(self._fold(key), ()))
