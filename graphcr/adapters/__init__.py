"""Adapters for graphcr Ports.

Available Adapters:
    - InMemoryObjectStore: dictionary-backed object store with YAML fixtures
"""

from graphcr.adapters.memory import InMemoryObjectStore

__all__ = ["InMemoryObjectStore"]
