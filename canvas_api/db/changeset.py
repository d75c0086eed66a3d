# canvas_api/db/changeset.py
"""
Staged, validated field changes over a model instance.

A Changeset never raises on invalid input. Each validation step records a
FieldError and the pipeline carries on, so the caller gets every invalid
field at once and decides how to render them.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorReason(str, Enum):
    REQUIRED = "required"
    IMMUTABLE = "immutable"
    FORMAT = "format"
    UNIQUENESS = "uniqueness"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    reason: ErrorReason

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "reason": self.reason.value, "detail": self.message}


@dataclass
class Changeset:
    data: Any
    changes: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)
    # Field name -> database constraint name, checked when a commit fails
    constraints: Dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def cast(self, params: Dict[str, Any], permitted: Iterable[str]) -> "Changeset":
        """Copy permitted params into changes, skipping values equal to the current data."""
        for key in permitted:
            if key not in params:
                continue
            value = params[key]
            if isinstance(value, str) and value.strip() == "":
                value = None
            if value != getattr(self.data, key, None):
                self.changes[key] = value
        return self

    def get_change(self, key: str, default: Any = None) -> Any:
        return self.changes.get(key, default)

    def get_field(self, key: str) -> Any:
        if key in self.changes:
            return self.changes[key]
        return getattr(self.data, key, None)

    def put_change(self, key: str, value: Any) -> "Changeset":
        self.changes[key] = value
        return self

    def add_error(self, key: str, message: str, reason: ErrorReason) -> "Changeset":
        self.errors.append(FieldError(key, message, reason))
        return self

    def errors_on(self, key: str) -> List[FieldError]:
        return [error for error in self.errors if error.field == key]

    def validate_required(self, keys: Iterable[str]) -> "Changeset":
        for key in keys:
            if _blank(self.get_field(key)):
                self.add_error(key, "can't be blank", ErrorReason.REQUIRED)
        return self

    def validate_change_required(self, key: str) -> "Changeset":
        """Like validate_required, but the value must come from the change itself."""
        if _blank(self.get_change(key)):
            self.add_error(key, "can't be blank", ErrorReason.REQUIRED)
        return self

    def validate_format(self, key: str, pattern: "re.Pattern[str]", message: str = "has invalid format") -> "Changeset":
        value = self.get_change(key)
        if value is None:
            return self
        if not isinstance(value, str) or not pattern.fullmatch(value):
            self.add_error(key, message, ErrorReason.FORMAT)
        return self

    def unique_constraint(self, key: str, name: str) -> "Changeset":
        self.constraints[key] = name
        return self

    def constraint_field(self, error_message: str) -> Optional[str]:
        """Return the field whose declared constraint is named in a database error."""
        table = getattr(self.data, "__tablename__", None)
        for key, name in self.constraints.items():
            # PostgreSQL reports the constraint name, SQLite reports "table.column"
            if name in error_message or (table and f"{table}.{key}" in error_message):
                return key
        return None

    def apply(self) -> Any:
        for key, value in self.changes.items():
            setattr(self.data, key, value)
        return self.data


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")
