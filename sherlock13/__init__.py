"""Sherlock 13: a networked four-player deduction game with a server and a pygame client."""

__version__ = "0.1.0"