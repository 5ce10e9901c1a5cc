"""Storm events impact report: fetch, clean, analyze and report on NOAA storm data."""

__version__ = "0.1.0"
