"""Domain layer — pure timer state, no I/O.

Modules here depend only on stdlib and pydantic. They must never import
from infrastructure, services, commands, or output.
"""
