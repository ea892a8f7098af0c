"""
Partial updates of stored entities from pydantic patch payloads.
"""

from __future__ import annotations

from pydantic import BaseModel


def apply_patch(entity: dict, patch: BaseModel) -> dict:
    """
    Overwrite `entity` fields with the members set on `patch`, in place.

    Omitted (None) members are skipped, and so are empty strings: an empty
    string can never clear a stored text field. Numeric members such as
    `order` are applied whenever provided, including 0.
    """
    for name, value in patch.model_dump(exclude_none=True).items():
        if isinstance(value, str) and not value:
            continue
        entity[name] = value
    return entity
