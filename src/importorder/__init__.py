"""Sort and group the import blocks of Python source files."""

__version__ = "0.1.0"
