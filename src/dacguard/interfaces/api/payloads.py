"""Request payload normalization for privilege saves.

Two body shapes are accepted:

- ``{"uri": ..., "privileges": {principal_id: [privilege, ...]}}``
- ``{"uri": ..., "users": {principal_id: {privilege: "on", "type": ...}}}``,
  the serialized checkbox form, whose ``type`` field is dropped.

``resource_id`` is accepted in place of ``uri``.
"""

from typing import Any

from dacguard.domain.exceptions import InvalidPayload


def parse_resource_id(body: dict[str, Any]) -> str:
    resource_id = body.get("uri") or body.get("resource_id")
    if isinstance(resource_id, list) and len(resource_id) == 1:
        resource_id = resource_id[0]
    if not isinstance(resource_id, str) or not resource_id.strip():
        raise InvalidPayload("Missing required field: uri")
    return resource_id.strip()


def parse_proposed(body: dict[str, Any]) -> dict[str, list[str]]:
    """Return the canonical ``{principal_id: [privilege, ...]}`` mapping."""
    if "privileges" in body:
        return _from_privileges(body["privileges"])
    if "users" in body:
        return _from_form(body["users"])
    raise InvalidPayload("Missing required field: privileges or users")


def parse_version(body: dict[str, Any]) -> int | None:
    version = body.get("version")
    if version is None:
        return None
    if isinstance(version, bool):
        raise InvalidPayload("version must be an integer")
    try:
        return int(version)
    except (TypeError, ValueError):
        raise InvalidPayload("version must be an integer") from None


def _from_privileges(privileges: Any) -> dict[str, list[str]]:
    if not isinstance(privileges, dict):
        raise InvalidPayload("privileges must be an object")
    proposed = {}
    for principal_id, held in privileges.items():
        if isinstance(held, str):
            held = [held]
        if not isinstance(held, list) or not all(isinstance(p, str) for p in held):
            raise InvalidPayload(f"privileges of {principal_id} must be a list of names")
        proposed[principal_id] = held
    return proposed


def _from_form(users: Any) -> dict[str, list[str]]:
    if not isinstance(users, dict):
        raise InvalidPayload("users must be an object")
    proposed = {}
    for principal_id, data in users.items():
        if not isinstance(data, dict):
            raise InvalidPayload(f"users entry of {principal_id} must be an object")
        proposed[principal_id] = [key for key in data if key != "type"]
    return proposed
