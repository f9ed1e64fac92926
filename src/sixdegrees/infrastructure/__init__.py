"""Infrastructure layer — database, catalog adapters, graph snapshot, path cache.

This layer depends on stdlib, third-party libs (SQLAlchemy, NetworkX), and
the domain layer's error and path types. It must never import from
services, commands, or output.
"""
