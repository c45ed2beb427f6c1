"""API Tracer - record the API traffic a web page generates."""

__version__ = "1.0.0"
