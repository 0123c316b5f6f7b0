"""
Main entry point for running recordstore as a module.

Usage:
    python -m recordstore list books
    python -m recordstore get books 978-0134685991
    python -m recordstore put books '{"id": "1", "title": "Dune"}'
"""

from .cli import app

if __name__ == "__main__":
    app()
