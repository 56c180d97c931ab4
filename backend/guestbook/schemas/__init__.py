"""Pydantic Schemas — request/response shapes for API endpoints.

Design Decisions:
    - Schemas check types only; length and emptiness rules live in
      core/message_rules so the store enforces them for every caller
"""
