"""Import-string lookup shared by ``perch run`` and ``perch routes``."""

import importlib

from perch.app import App


def resolve_app(import_string: str) -> App:
    """Import ``"package.module:name"`` and return the App it names.

    ``name`` defaults to ``app``. When it names a zero-argument factory
    rather than an App, the factory is called.

    Raises:
        ModuleNotFoundError: The module part does not import.
        AttributeError: The module has no such name.
        TypeError: The name is neither an App nor a factory returning one.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, App):
        msg = f"{import_string!r} is a {type(target).__name__}, not a perch.App instance"
        raise TypeError(msg)
    return target
