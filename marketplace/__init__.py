"""Claude Code plugin marketplace tooling."""

__version__ = "0.1.0"
