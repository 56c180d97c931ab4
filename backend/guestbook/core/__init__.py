"""Core Layer — domain logic with no IO, no async, no file access.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or schemas/
    - Policy and validation functions take the current time as an argument

Design Decisions:
    - Functional core separated from imperative shell: the policy and the
      validation rules are testable without a filesystem or an event loop
"""
