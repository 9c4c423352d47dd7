"""Domain layer — markers, lifecycle policy, and lanes.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
