"""winscout Command Line Interface.

Usage:
    winscout --help
    winscout detect screen1.png screen2.png --format json
    winscout scan --attempts 5 --thumbnails ./thumbs
"""

from .main import main

__all__ = ["main"]
