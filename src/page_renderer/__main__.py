"""Main entry point for the page renderer command line."""
from .cli import app

if __name__ == "__main__":
    app()
