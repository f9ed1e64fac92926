"""sixdegrees — shortest co-credit paths between people in a credits graph."""

__version__ = "0.1.0"
