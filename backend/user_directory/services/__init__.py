"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own IO (database); core owns decisions (validation, mapping)
"""
