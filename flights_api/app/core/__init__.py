"""
Core infrastructure: settings, logging, error taxonomy, date helpers
and the in‑memory flight store.
"""
