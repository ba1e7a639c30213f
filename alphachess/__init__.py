"""Chess rules, legal-move generation, an alpha-beta search opponent and a terminal game."""

__version__ = "0.1.0"
__all__ = ["__version__"]