"""liveren - interactive batch renamer with a live regex preview."""

__version__ = "0.1.0"
