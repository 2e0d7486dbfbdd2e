"""Build tooling that packages OSCR as a portable AppImage."""

__version__ = "0.1.0"
