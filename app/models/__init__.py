"""
Database models package
"""

from .user import User
from .card_template import CardTemplate
from .event import Event
from .guest import Guest
from .card import Card

__all__ = ["User", "CardTemplate", "Event", "Guest", "Card"]
