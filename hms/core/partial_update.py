"""
Partial-update resolution shared by the PATCH/PUT routes.

A request body is turned into an explicit set of present/absent field values
for the entity's whitelist, validated, and reduced to the clause of columns
that actually change. Nothing here touches the database; callers fetch the
current row first and perform the write themselves.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..exceptions import NoOpError
from .validators import Validator, check

logger = logging.getLogger(__name__)

TOGGLE = "toggle"


@dataclass(frozen=True)
class UpdatableField:
    """
    One mutable field of an entity.

    Attributes:
        name: Key accepted in the request body
        column: Column written to; defaults to ``name``
        validator: Normalizes the raw value or raises ValueError
        nullable: Whether JSON null clears the column; otherwise null means absent
        toggle: Two-value enum flipped by the ``"toggle"`` sentinel
    """
    name: str
    column: Optional[str] = None
    validator: Optional[Validator] = None
    nullable: bool = False
    toggle: Optional[Tuple[str, str]] = None

    @property
    def target(self) -> str:
        return self.column or self.name


class FieldValue:
    """A field that is either present with a value or absent."""
    __slots__ = ("present", "value")

    def __init__(self, present: bool, value: Any = None):
        self.present = present
        self.value = value

    @classmethod
    def of(cls, value: Any) -> "FieldValue":
        return cls(True, value)

    @classmethod
    def absent(cls) -> "FieldValue":
        return cls(False)

    def __repr__(self):
        return f"FieldValue({self.value!r})" if self.present else "FieldValue(<absent>)"


def collect_fields(body: Mapping[str, Any], fields: Iterable[UpdatableField]) -> Dict[str, FieldValue]:
    """
    Build the present/absent view of ``body`` over the whitelist.

    Keys outside the whitelist are dropped. A null value only counts as
    present for nullable fields.
    """
    collected = {}
    for field in fields:
        if field.name not in body:
            collected[field.name] = FieldValue.absent()
            continue
        value = body[field.name]
        if value is None and not field.nullable:
            collected[field.name] = FieldValue.absent()
        else:
            collected[field.name] = FieldValue.of(value)
    return collected


def toggled(current: Any, choices: Tuple[str, str]) -> str:
    """Complement of ``current`` within a two-value enum."""
    first, second = choices
    return second if current == first else first


def _resolve_value(field: UpdatableField, value: Any, current: Mapping[str, Any]) -> Any:
    if field.toggle and value == TOGGLE:
        return toggled(current.get(field.target), field.toggle)
    if value is None or field.validator is None:
        return value
    return check(field.name, field.validator, value)


def resolve_update(
    current: Mapping[str, Any],
    body: Mapping[str, Any],
    fields: Iterable[UpdatableField],
) -> Dict[str, Any]:
    """
    Compute the set-clause for a partial update.

    Args:
        current: Stored row, keyed by column name
        body: Request body
        fields: Whitelist of mutable fields

    Returns:
        Mapping of column name to new value, containing only changed columns

    Raises:
        ValidationError: A present field failed its validator
        NoOpError: Nothing would change
    """
    fields = list(fields)
    collected = collect_fields(body, fields)

    # One failing field rejects the whole update
    resolved = {}
    for field in fields:
        candidate = collected[field.name]
        if candidate.present:
            resolved[field] = _resolve_value(field, candidate.value, current)

    clause = {
        field.target: value
        for field, value in resolved.items()
        if current.get(field.target) != value
    }
    if not clause:
        if resolved:
            raise NoOpError("No changes to apply")
        raise NoOpError("At least one field must be provided to update")
    logger.debug(f"Resolved update clause: {clause}")
    return clause
