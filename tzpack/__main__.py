"""Entry point for running tzpack as a module."""

from .cli import app

if __name__ == "__main__":
    app()
