"""
Application package initializer.

The application is split into ``core`` (configuration, logging and the
embedded document store), ``schemas`` (request and response models),
``services`` (store queries per resource) and ``api`` (HTTP routes).
"""

from .main import app  # noqa: F401
