"""Graph engine for exploring related research papers."""

__version__ = "0.1.0"
