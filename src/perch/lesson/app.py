"""The routing lesson app.

Five GET routes: two fixed HTML snippets, a dice roll, path-parameter
addition, and a record lookup by id.

Run:
    python -m perch.lesson
    perch run perch.lesson:app
"""

import random

from perch import App, HTTPError, NotFound
from perch.lesson.games import SAMPLE_GAMES, GameStore, InMemoryGameStore
from perch.routing.params import leading_int

app = App()

_store = InMemoryGameStore(SAMPLE_GAMES)
app.provide(GameStore, lambda: _store)


@app.get("/hello")
def hello():
    return "<h2>Hello <em>World</em>!</h2>"


@app.get("/potato")
def potato():
    return "<p>Boil 'em, mash 'em, stick 'em in a stew</p>"


@app.get("/dice")
def dice():
    return {"roll": random.randint(1, 6)}


# Keeps the sum well inside the interpreter's int/str conversion limit
MAX_DIGITS = 1000


@app.get("/add/:num1/:num2")
def add(num1: str, num2: str):
    # "abc" counts as 0, "12abc" as 12
    try:
        total = sum(leading_int(n, max_digits=MAX_DIGITS) for n in (num1, num2))
    except ValueError as exc:
        raise HTTPError(status=400, detail=str(exc)) from exc
    return {"result": total}


@app.get("/games/:id")
def game(id: str, store: GameStore):  # noqa: A002 — named after the route placeholder
    try:
        record = store.get(leading_int(id, max_digits=MAX_DIGITS))
    except ValueError:
        record = None
    if record is None:
        raise NotFound(f"No game with id {id!r}")
    return record.to_dict()
