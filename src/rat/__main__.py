"""Allow running rat with ``python -m rat``."""

from .cli import main

main()
