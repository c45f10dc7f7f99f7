"""Supplier domain – the service surface wrapped by the cache."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

Supplier = Mapping[str, Any]
Page = Mapping[str, Any]


@runtime_checkable
class SupplierService(Protocol):
    """Port: supplier domain service.

    Query methods return a page ``{"data", "total", "page", "limit",
    "total_pages"}``; ``options`` carries ``filter``, ``page``, ``limit``
    and ``sort``. Unknown ids raise
    :class:`~aerocache.kernel.errors.NotFoundError`.
    """

    async def find_by_id(self, supplier_id: str) -> Supplier: ...
    async def find_all(self, options: Mapping[str, Any] | None = None) -> Page: ...
    async def search(self, query: str, options: Mapping[str, Any] | None = None) -> Page: ...
    async def get_by_status(self, status: str, options: Mapping[str, Any] | None = None) -> Page: ...
    async def get_by_qualification(self, qualification_type: str, options: Mapping[str, Any] | None = None) -> Page: ...

    async def create(self, data: Mapping[str, Any]) -> Supplier: ...
    async def update(self, supplier_id: str, data: Mapping[str, Any]) -> Supplier: ...
    async def delete(self, supplier_id: str) -> bool: ...

    async def add_contact(self, supplier_id: str, contact_data: Mapping[str, Any]) -> Mapping[str, Any]: ...
    async def update_contact(self, supplier_id: str, contact_id: str, contact_data: Mapping[str, Any]) -> Mapping[str, Any]: ...
    async def remove_contact(self, supplier_id: str, contact_id: str) -> bool: ...

    async def add_qualification(self, supplier_id: str, qualification_data: Mapping[str, Any]) -> Mapping[str, Any]: ...
    async def update_qualification(self, supplier_id: str, qualification_id: str, qualification_data: Mapping[str, Any]) -> Mapping[str, Any]: ...
    async def remove_qualification(self, supplier_id: str, qualification_id: str) -> bool: ...


__all__ = ["Page", "Supplier", "SupplierService"]
