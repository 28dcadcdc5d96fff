"""Tile-based collect-and-escape puzzle game on .ber maps, with an XPM reader and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "mapfile", "validation", "game", "app"]