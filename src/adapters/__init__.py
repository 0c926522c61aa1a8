"""Adapters to the outside world (httpx, the Beeminder REST API).

Each module implements a contract from `core.interfaces` or supports one.
"""
