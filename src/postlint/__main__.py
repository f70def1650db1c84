"""Allow ``python -m postlint``."""

from postlint.cli.main import app

if __name__ == "__main__":
    app()
