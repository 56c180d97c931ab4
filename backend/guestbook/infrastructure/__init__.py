"""Infrastructure Layer — stateful components and cross-cutting concerns.

Invariants:
    - Shared mutable state (session table, message file) lives only here
    - Every piece of shared state is guarded by exactly one lock
"""
