"""IRC bot that answers channel messages with text from a local LLM server."""

__version__ = "0.1.0"
__all__ = ["__version__"]