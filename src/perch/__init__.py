"""Perch — a small ASGI web framework built around a routing DSL.

Declare routes with decorators; placeholders bind path segments into
handler arguments; return values become HTML or JSON responses.

Basic usage::

    from perch import App

    app = App()

    @app.get("/hello")
    def hello():
        return "<h2>Hello <em>World</em>!</h2>"

    @app.get("/add/{num1:int}/{num2:int}")
    def add(num1, num2):
        return {"result": num1 + num2}

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in ("ConfigurationError", "HTTPError", "NotFound", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
