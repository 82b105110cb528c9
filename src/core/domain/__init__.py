"""Domain layer: resource kinds, immutable values, list options and pagination.

Nothing in here knows about HTTP, JSON or the CLI.
"""
