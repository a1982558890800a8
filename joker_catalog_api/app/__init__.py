"""
Application package initializer.

This package contains the entrypoint for the API and its submodules:
``core`` (configuration, logging, errors and HTTP hardening),
``services`` (dataset loading, caching and queries), ``schemas``
(response models) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
