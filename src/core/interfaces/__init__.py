"""Core interfaces.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- The dispatcher depends on the contract, so tests can hand it a fake.
"""
