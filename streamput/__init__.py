"""Stream a local file to an AList-compatible file service over HTTP."""

__version__ = "0.1.0"
