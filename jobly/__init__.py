"""Jobly: hand-compiled SQL access layer for jobs and companies."""

__version__ = "0.1.0"
