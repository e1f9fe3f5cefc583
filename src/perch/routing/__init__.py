"""Routing — declared route table with first-match dispatch.

Routes are registered during setup and compiled into an immutable,
ordered table when the app freezes.
"""
