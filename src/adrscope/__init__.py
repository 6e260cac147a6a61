"""adrscope — interactive viewers and summaries for Architecture Decision Records."""

__version__ = "0.3.0"
