"""Core state-machine evaluation utilities.

Responsibilities:
  - Provide the transition table wrapper, evaluator and result types.
  - Must not execute effects; effect tokens are reported to the caller.
"""
