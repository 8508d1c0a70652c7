"""Application catalogue on SQLite with users, installs, favourites and licence tracking."""

__version__ = "0.1.0"