"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, errors, dates and the
in‑memory store), ``services`` (business rules), ``schemas`` (request
and response bodies) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
