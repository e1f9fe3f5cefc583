"""Shared fixtures."""

import sys
import types

import pytest

from perch.app import App


@pytest.fixture
def fake_module(monkeypatch: pytest.MonkeyPatch):
    """Register a throwaway module named ``fake_perch_app`` with an ``app``."""
    module = types.ModuleType("fake_perch_app")
    app = App()

    @app.get("/hello")
    def hello():
        return "hi"

    @app.route("/games/:id", methods=["GET", "POST"], name="game")
    def game(id: str):  # noqa: A002
        return id

    module.app = app  # type: ignore[attr-defined]
    module.empty = App()  # type: ignore[attr-defined]
    module.create_app = lambda: app  # type: ignore[attr-defined]
    module.broken_factory = lambda: 1 / 0  # type: ignore[attr-defined]
    module.not_an_app = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "fake_perch_app", module)
    return module
