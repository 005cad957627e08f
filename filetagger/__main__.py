"""Allow ``python -m filetagger``."""

from filetagger.cli import app

if __name__ == "__main__":
    app()
