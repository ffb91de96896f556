"""FindRide: driving distance lookups through a Google Maps proxy."""

__version__ = "0.1.0"
