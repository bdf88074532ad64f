"""A small Monte Carlo path tracer with a command line that writes PPM images."""

__version__ = "0.1.0"