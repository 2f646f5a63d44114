"""Headless game logic for a side-scrolling elevator action game on a small entity-component-system core."""

__version__ = "0.1.0"