from src.common.exceptions import Forbidden, NotFound


def assert_owner(entity, caller_id: int, name: str):
    """
    Guards an update/delete: the entity must exist and belong to the caller.

    Existence is checked first, so a missing row is always a 404 even for
    callers that would not be allowed to touch it.
    """
    if entity is None:
        raise NotFound(f"{name} not found")
    if entity.owner_id != caller_id:
        raise Forbidden(f"Only the owner can modify this {name.lower()}")
    return entity
