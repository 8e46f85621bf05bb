"""
gateway-config Package

Persistent configuration store for a multi-tenant API-key and quota gateway:
JSON settings blobs, per-model quotas, category quotas and worker keys, each
write mirrored to a remote backup.
"""

__version__ = "0.1.0"

__all__ = [
    "core",
    "models",
    "services",
    "stores",
]
