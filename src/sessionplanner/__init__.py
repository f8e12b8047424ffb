"""Session planning with recurring sessions, speakers and self-registration."""

__version__ = "0.1.0"
