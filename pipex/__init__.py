"""Run commands joined by pipes between an input file and an output file."""

__version__ = "1.0.0"