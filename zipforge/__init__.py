"""Write ZIP archives, whole or streamed, with ZIP64 and Info-ZIP Unicode field support."""

__version__ = "0.1.0"