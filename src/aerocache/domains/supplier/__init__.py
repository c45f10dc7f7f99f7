"""Supplier domain – cached supplier service."""
from aerocache.domains.supplier.cached_service import (
    SUPPLIER_OPERATIONS,
    SUPPLIER_POLICIES,
    CachedSupplierService,
)
from aerocache.domains.supplier.service import SupplierService

__all__ = [
    "SUPPLIER_OPERATIONS",
    "SUPPLIER_POLICIES",
    "CachedSupplierService",
    "SupplierService",
]
