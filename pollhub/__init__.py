"""Survey and vote TCP server with file storage and an interactive terminal client."""

__version__ = "0.1.0"