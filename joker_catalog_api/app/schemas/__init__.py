"""
Pydantic schema definitions for API payloads.

Schemas describe what the HTTP layer returns; the service layer works
with plain dictionaries so joker attributes pass through untouched.
"""
