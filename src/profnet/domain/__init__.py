"""Domain layer — pure state machines and error taxonomy.

Domain modules depend only on the standard library. They never import
from infrastructure, services, commands, or output.
"""
