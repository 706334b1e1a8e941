"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored ``Flight`` records to decouple
the API representation (camelCase keys, computed ``durationDays``)
from the in‑memory model.
"""
