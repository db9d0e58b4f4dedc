"""A small synchronous Redis client with a RESP codec, command builders and reply converters."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "codec",
    "commands",
    "connector",
    "convert",
    "errors",
    "hashes",
    "keys",
    "lists",
    "protocol",
    "simple",
    "strings",
]