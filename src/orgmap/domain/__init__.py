"""Domain layer: node kinds, snapshot models and tree models.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
