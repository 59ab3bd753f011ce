"""Row mappers for group query results."""

from groupread.schemas.common import StatusOption
from groupread.schemas.groups import GroupRecord, GroupLookup


def map_group_row(row) -> GroupRecord:
    """Map a row from ``all_group_types_query`` to a ``GroupRecord``."""
    data = row._mapping
    return GroupRecord(
        id=data["id"],
        name=data["name"],
        external_id=data["external_id"],
        office_id=data["office_id"],
        office_name=data["office_name"],
        office_hierarchy=data["office_hierarchy"],
        center_id=data["center_id"],
        center_name=data["center_name"],
        staff_id=data["staff_id"],
        staff_name=data["staff_name"],
        hierarchy=data["hierarchy"],
        status=StatusOption.from_status(data["status_enum"]),
        activation_date=data["activation_date"],
        group_level=data["group_level"],
    )


def map_lookup_row(row) -> GroupLookup:
    data = row._mapping
    return GroupLookup(id=data["id"], name=data["name"])
