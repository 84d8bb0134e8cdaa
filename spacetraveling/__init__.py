"""SpaceTraveling: static blog generator for a headless content API."""

__version__ = "0.1.0"
