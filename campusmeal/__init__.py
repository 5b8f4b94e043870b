"""Client, receipt renderer and report exporter for the campus meal-ordering API."""

__version__ = "0.1.0"
