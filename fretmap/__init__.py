"""fretmap: major-scale fretboard maps for the guitar."""

__version__ = "0.1.0"
