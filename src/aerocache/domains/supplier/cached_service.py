"""Supplier domain – operation table and CachedSupplierService.

Query results are tagged with every attribute value they were selected by;
writes sweep ``supplier:list`` plus the old and new ``status``, ``type`` and
qualification-type tags of the supplier they touched.
"""
from __future__ import annotations

from typing import Any, Mapping

from aerocache.application.cache import (
    CacheCoordinator,
    CachedService,
    CachePolicies,
    CachePolicy,
    MutationKind,
    OperationTable,
    ReadOperation,
    TagAttribute,
    WriteOperation,
    make_tag,
)

ENTITY = "supplier"


def _filter_tags(options: Mapping[str, Any] | None = None, **_: Any) -> list[str]:
    tags = [make_tag(ENTITY, "list")]
    criteria = (options or {}).get("filter") or {}
    if criteria.get("status"):
        tags.append(make_tag(ENTITY, "status", criteria["status"]))
    if criteria.get("type"):
        tags.append(make_tag(ENTITY, "type", criteria["type"]))
    if criteria.get("qualification"):
        tags.append(make_tag(ENTITY, "qualification", criteria["qualification"]))
    return tags


def _search_tags(query: str, **_: Any) -> list[str]:
    return [make_tag(ENTITY, "list"), make_tag(ENTITY, "search"), make_tag(ENTITY, "search", query)]


def _status_tags(status: str, **_: Any) -> list[str]:
    return [make_tag(ENTITY, "status"), make_tag(ENTITY, "status", status)]


def _qualification_tags(qualification_type: str, **_: Any) -> list[str]:
    return [make_tag(ENTITY, "qualification"), make_tag(ENTITY, "qualification", qualification_type)]


def _written_qualification_tags(qualification_data: Mapping[str, Any] | None = None, **_: Any) -> list[str]:
    tags = [make_tag(ENTITY, "qualification")]
    if qualification_data and qualification_data.get("type"):
        tags.append(make_tag(ENTITY, "qualification", qualification_data["type"]))
    return tags


SUPPLIER_OPERATIONS = OperationTable(
    entity_type=ENTITY,
    reads={
        "find_by_id": ReadOperation(id_arg="supplier_id"),
        "find_all": ReadOperation(tags=_filter_tags),
        "search": ReadOperation(tags=_search_tags),
        "get_by_status": ReadOperation(tags=_status_tags),
        "get_by_qualification": ReadOperation(tags=_qualification_tags),
    },
    writes={
        "create": WriteOperation(MutationKind.CREATE, changes_arg="data"),
        "update": WriteOperation(MutationKind.UPDATE, id_arg="supplier_id", changes_arg="data"),
        "delete": WriteOperation(MutationKind.DELETE, id_arg="supplier_id"),
        "add_contact": WriteOperation(id_arg="supplier_id"),
        "update_contact": WriteOperation(id_arg="supplier_id"),
        "remove_contact": WriteOperation(id_arg="supplier_id"),
        "add_qualification": WriteOperation(id_arg="supplier_id", tags=_written_qualification_tags),
        "update_qualification": WriteOperation(id_arg="supplier_id", tags=_written_qualification_tags),
        "remove_qualification": WriteOperation(id_arg="supplier_id", tags=_written_qualification_tags),
    },
    tag_attributes=(
        TagAttribute("status"),
        TagAttribute("type"),
        TagAttribute("qualifications", tag_name="qualification", item_key="type"),
    ),
)

SUPPLIER_POLICIES: dict[str, CachePolicy] = {
    "supplier.find_by_id": CachePolicies.ENTITY,
    "supplier.find_all": CachePolicies.DYNAMIC,
    "supplier.search": CachePolicies.DYNAMIC,
    "supplier.get_by_status": CachePolicies.DYNAMIC,
    "supplier.get_by_qualification": CachePolicies.DYNAMIC,
}


class CachedSupplierService(CachedService):
    """Supplier service with read-through caching.

    Registers :data:`SUPPLIER_POLICIES` for any supplier operation the
    coordinator's registry does not already know.
    """

    def __init__(self, service: Any, coordinator: CacheCoordinator) -> None:
        super().__init__(service, coordinator, SUPPLIER_OPERATIONS)
        for operation, policy in SUPPLIER_POLICIES.items():
            if operation not in coordinator.policies:
                coordinator.policies.register(operation, policy)


__all__ = ["SUPPLIER_OPERATIONS", "SUPPLIER_POLICIES", "CachedSupplierService"]
