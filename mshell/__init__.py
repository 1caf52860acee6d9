"""Building blocks of a small shell: environment, builtins and text helpers."""

__version__ = "0.1.0"
__all__ = ["builtins", "chars", "environment", "formatting", "lines", "text"]