"""Terminal dashboard for a weekly schedule of online conferences."""

__version__ = "0.1.0"