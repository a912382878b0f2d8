"""Infrastructure layer — database, graph engine, transactional store.

This layer depends on stdlib and third-party libs (SQLAlchemy, NetworkX).
It must never import from domain, services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
