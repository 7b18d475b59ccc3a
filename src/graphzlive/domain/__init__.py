"""Domain layer — graph and comment models, filtering, aggregation, links.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
