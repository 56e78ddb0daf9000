"""Domain layer: schema models, identifier rules, and schema errors.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from generator, backends, services, commands, or config.
"""
