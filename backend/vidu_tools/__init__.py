"""Vidu image-to-video tools: start/poll generation jobs and upload source images."""

__version__ = "1.0.0"
