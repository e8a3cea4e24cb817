"""Installer and updater for the Google App Engine Go SDK."""

__version__ = "0.4.0"
