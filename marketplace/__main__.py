"""Allow ``python -m marketplace``."""

from marketplace.cli.commands import app

app()
