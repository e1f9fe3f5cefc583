"""The routing lesson: a five-route perch app (see ``perch.lesson.app``)."""

from perch.lesson.app import app

__all__ = ["app"]
