"""An endless side-scrolling platformer with a knight, monsters and a chasing camera."""

__version__ = "0.1.0"