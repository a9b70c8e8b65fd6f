"""Core Layer — task rules, error variants, and the persistence contract. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation and classification functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: services await the port, core decides
"""
