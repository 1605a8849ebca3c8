"""Echo service: a single chat endpoint that echoes messages back with a fixed prefix."""

__version__ = "1.0.0"
