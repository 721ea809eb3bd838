"""Protocol interfaces shared across layers."""

from kitchensync.shared.protocols.services import (
    CacheStoreProtocol,
    ProviderClientProtocol,
)

__all__ = ["CacheStoreProtocol", "ProviderClientProtocol"]
