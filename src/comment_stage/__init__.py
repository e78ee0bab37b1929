"""Comment Stage: moderated comments and community ratings."""

__version__ = "1.0.0"
