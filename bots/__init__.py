"""Bot strategies for Seep."""

from .base import BotStrategy
from .random_bot import RandomBot

__all__ = ["BotStrategy", "RandomBot"]
