"""Top-level package for Django configuration.

This package holds the settings modules for the hotel back office and
the WSGI and ASGI entry points.
"""
