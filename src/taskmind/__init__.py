"""taskmind: a single-user task tracker driven by natural-language input."""

__version__ = "0.1.0"
