"""qanda - questions, answers, and votes over a document store."""

__version__ = "0.1.0"
