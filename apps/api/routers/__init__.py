"""Routers package."""

from . import (
    health,
    videos,
    comments,
    tweets,
    likes,
    subscriptions,
    users,
)
