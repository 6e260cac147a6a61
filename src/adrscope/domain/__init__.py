"""Domain layer — document model, validation, graph, facets, and the explorer engine.

This layer depends only on stdlib, pydantic, and networkx.
It must never import from services, infrastructure, commands, or config.
"""
