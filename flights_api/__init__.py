"""
Top‑level package for the Flights API.

This file makes ``flights_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``flights_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
