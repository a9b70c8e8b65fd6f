"""Database Metadata — declarative base shared by ORM models and migrations.

Invariants:
    - No engine or session is created at import time

Design Decisions:
    - Engine lifecycle lives in infrastructure/database.py (startup-owned singleton)
"""
