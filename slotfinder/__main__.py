"""
Entry point for ``python -m slotfinder``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
