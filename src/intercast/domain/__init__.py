"""Domain layer — filters, type registry, casting, and validation.

This layer depends only on stdlib, pydantic, and dateutil.
It must never import from services, config, commands, or plugins.
"""
