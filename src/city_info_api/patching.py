"""Partial update of points of interest via JSON Patch style operations.

A patch is applied to a working copy of the entity's update shape, never to
the entity itself. Operation failures are collected rather than aborting the
patch, then the result goes through the same structural and domain validation
as a full update. Only a patch that passes everything is merged back into the
entity, so a rejected patch leaves the entity exactly as it was.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import ValidationError

from city_info_api.mapping import apply_update, to_point_of_interest_update
from city_info_api.models import PointOfInterest as PointOfInterestModel
from city_info_api.schemas import PatchOperation, PatchOperationKind, PointOfInterestUpdate
from city_info_api.validation import (
    ValidationFailedError,
    add_error,
    check_name_differs_from_description,
    errors_from_pydantic,
)

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class PatchOperationError(Exception):
    """A single operation could not be applied to the working copy."""


def _resolve_field(path: str | None, label: str = "path") -> str:
    """Map a ``/field`` path onto a field of the update shape (case-insensitive)."""
    if not path:
        raise PatchOperationError(f"The '{label}' location is required for this operation.")
    if not path.startswith("/"):
        raise PatchOperationError(f"The {label} '{path}' must start with '/'.")

    segment = path[1:]
    if "/" not in segment:
        for field in PointOfInterestUpdate.model_fields:
            if field.lower() == segment.lower():
                return field
    raise PatchOperationError(
        f"The target location specified by path segment '{segment}' was not found."
    )


def _check_value(value: Any) -> None:
    """Every editable field is a string, so only strings and null are accepted."""
    if value is not None and not isinstance(value, str):
        raise PatchOperationError(f"The value '{value}' is invalid for target location.")


def _set(document: Document, operation: PatchOperation) -> None:
    field = _resolve_field(operation.path)
    _check_value(operation.value)
    document[field] = operation.value


def _remove(document: Document, operation: PatchOperation) -> None:
    # Fields of the update shape can't disappear, removal resets to null
    document[_resolve_field(operation.path)] = None


def _move(document: Document, operation: PatchOperation) -> None:
    source = _resolve_field(operation.from_, "from")
    target = _resolve_field(operation.path)
    value = document[source]
    document[source] = None
    document[target] = value


def _copy(document: Document, operation: PatchOperation) -> None:
    source = _resolve_field(operation.from_, "from")
    target = _resolve_field(operation.path)
    document[target] = document[source]


def _test(document: Document, operation: PatchOperation) -> None:
    field = _resolve_field(operation.path)
    if document[field] != operation.value:
        raise PatchOperationError(
            f"The current value '{document[field]}' at path '{operation.path}' "
            f"is not equal to the test value '{operation.value}'."
        )


_HANDLERS: dict[PatchOperationKind, Callable[[Document, PatchOperation], None]] = {
    PatchOperationKind.ADD: _set,
    PatchOperationKind.REPLACE: _set,
    PatchOperationKind.REMOVE: _remove,
    PatchOperationKind.MOVE: _move,
    PatchOperationKind.COPY: _copy,
    PatchOperationKind.TEST: _test,
}


def apply_patch(
    target: PointOfInterestUpdate, operations: Sequence[PatchOperation]
) -> PointOfInterestUpdate:
    """Apply ``operations`` in order to a copy of ``target`` and validate the result.

    Returns the validated, patched shape. Raises ValidationFailedError listing
    every failed operation, structural error and domain rule violation.
    """
    document: Document = target.model_dump()
    errors: dict[str, list[str]] = {}

    for index, operation in enumerate(operations):
        try:
            _HANDLERS[operation.op](document, operation)
        except PatchOperationError as e:
            add_error(errors, f"operations[{index}]", str(e))

    patched = None
    try:
        patched = PointOfInterestUpdate.model_validate(document)
    except ValidationError as e:
        for key, messages in errors_from_pydantic(e.errors()).items():
            errors.setdefault(key, []).extend(messages)

    check_name_differs_from_description(
        document.get("name"), document.get("description"), errors
    )

    if errors or patched is None:
        raise ValidationFailedError(errors)
    return patched


def patch_point_of_interest(
    poi: PointOfInterestModel, operations: Sequence[PatchOperation]
) -> PointOfInterestUpdate:
    """Patch an entity: project, apply, validate, then merge.

    The entity is only modified when the whole patch is accepted. The caller
    still has to commit through the repository.
    """
    patched = apply_patch(to_point_of_interest_update(poi), operations)
    apply_update(patched, poi)
    logger.debug(f"Patched point of interest {poi.id} of city {poi.city_id}")
    return patched
