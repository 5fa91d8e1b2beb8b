"""In-memory query engine over election collections for the e-voting client."""

__version__ = "0.1.0"
