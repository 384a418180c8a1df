"""rookery — deterministic chess rules engine and in-memory game sessions."""

__version__ = "0.1.0"
