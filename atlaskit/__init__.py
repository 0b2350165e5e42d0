"""Service toolkit: typed resource IDs, JWT claim helpers, error containers and runtime control."""

__version__ = "0.1.0"