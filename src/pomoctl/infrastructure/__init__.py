"""Infrastructure layer — storage, tick source, workspace wiring.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from services, commands, or output.
"""
