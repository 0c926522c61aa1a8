"""Command-line layer (Typer + Rich).

Why a package:
- Commands only build values and render results; the work happens in `core`.
"""
