"""
API routers, one module per resource
"""

from sportsbar.api import auth, content, events, games, menu, migration, reservations

__all__ = [
    "auth",
    "content",
    "events",
    "games",
    "menu",
    "migration",
    "reservations",
]
