"""
Remote Config showcase.

Fetches key/value configuration from a remote configuration backend,
falls back to bundled defaults, and renders showcase cards from the
active values.
"""

__version__ = "1.0.0"
