"""
Presentation Layer

- cards.py - Render functions for the showcase cards
- refresh.py - Refresh trigger and busy signal
- server.py - HTTP surface over both
"""

from .cards import Card, format_cards, parse_color, render_showcase
from .refresh import RefreshController
from .server import ShowcaseServer

__all__ = [
    "Card",
    "RefreshController",
    "ShowcaseServer",
    "format_cards",
    "parse_color",
    "render_showcase",
]
