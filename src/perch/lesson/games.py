"""Game records for the ``/games/:id`` lesson route.

The route only needs a lookup-by-id collaborator, so the store is a
Protocol. ``InMemoryGameStore`` backs the lesson app and the tests; a
real app would provide one that talks to its database.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class Game:
    """A game record."""

    id: int
    name: str
    genre: str

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready serialization."""
        return asdict(self)


class GameStore(Protocol):
    """Looks up games by id."""

    def get(self, game_id: int) -> Game | None: ...


class InMemoryGameStore:
    """A read-only GameStore over a fixed set of records."""

    __slots__ = ("_games",)

    def __init__(self, games: Iterable[Game] = ()) -> None:
        self._games: dict[int, Game] = {game.id: game for game in games}

    def get(self, game_id: int) -> Game | None:
        return self._games.get(game_id)

    def __len__(self) -> int:
        return len(self._games)


SAMPLE_GAMES: tuple[Game, ...] = (
    Game(id=1, name="Chess", genre="strategy"),
    Game(id=2, name="Yahtzee", genre="dice"),
    Game(id=3, name="Tetris", genre="puzzle"),
)
