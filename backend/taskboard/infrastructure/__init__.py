"""Infrastructure Layer — database access, persistence adapters, and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols; core never imports from here
    - Unique-constraint and document failures leave the adapter as port signals

Design Decisions:
    - One adapter per port (TaskRepository → SqlTaskRepository)
"""
