"""In-memory fundraiser and donation REST service"""

__version__ = "1.0.0"
