"""Pydantic Schemas — request validation and response envelopes.

Invariants:
    - Schemas validate at system boundary (user input)
    - Envelope helpers are the only way routes build success responses

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
