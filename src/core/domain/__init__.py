"""Domain models, command variants and errors.

Why:
- Pure data structures (Pydantic v2 and frozen dataclasses).
- The domain knows nothing about HTTP or the CLI.
"""
