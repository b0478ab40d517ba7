"""wire-beautify: tidy orthogonal wire segments in schematic diagrams."""

__version__ = "0.1.0"
