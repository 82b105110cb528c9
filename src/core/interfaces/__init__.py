"""Interfaces/abstractions of the core.

Adapters implement these Protocols; the core depends only on the contracts.
"""
