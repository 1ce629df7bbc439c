"""
Entry point for ``python -m flexbalance``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
