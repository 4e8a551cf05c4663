"""Client library for the Elk M1 security panel ASCII protocol."""

__version__ = "0.1.0"
