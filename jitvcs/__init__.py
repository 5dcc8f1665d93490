"""A small content-addressed version control system with an interactive shell."""

__version__ = "0.1.0"
__all__ = ["__version__"]