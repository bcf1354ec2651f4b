"""Types, request middleware helpers, API signing and billing rules for an AI chat service."""

__version__ = "0.1.0"