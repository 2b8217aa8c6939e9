"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database rows so the wire format
(``_id``, ``instagramUrl``) can differ from column names.
"""
