from graphcr.ports.store import ObjectRecord, ObjectStorePort

__all__ = [
    "ObjectStorePort",
    "ObjectRecord",
]
