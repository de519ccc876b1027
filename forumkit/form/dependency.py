# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Dependencies make a node available only for certain field values.

For example, a "reason" field that is only shown when a "status" field
is set to "closed"::

    reason.add_dependency(
        ValueFormFieldDependency.create("status").field(status).values(["closed"])
    )
"""

from __future__ import annotations

from typing import Any

from .node import FormNode


class FormFieldDependency:
    """A condition on the value of a field that a node depends on.

    The field can be given directly with :meth:`field` or, if it is not
    constructed yet, by id with :meth:`field_id`, in which case it is
    looked up when the document is built.
    """

    def __init__(self):
        self._id: str | None = None
        self._field = None
        self._field_id: str | None = None
        self._dependent_node = None

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self._id)

    @classmethod
    def create(cls, id: str):
        dependency = cls()
        dependency.id(id)
        return dependency

    def id(self, id: str):
        FormNode.validate_id(id)
        self._id = id
        return self

    def get_id(self) -> str:
        if self._id is None:
            raise RuntimeError("Id has not been set.")
        return self._id

    def field(self, field):
        from .field import AbstractFormField

        if not isinstance(field, AbstractFormField):
            raise TypeError(f"Dependencies need a form field, not {field!r}.")
        self._field = field
        self._field_id = field.get_id()
        return self

    def field_id(self, field_id: str):
        """Depend on the field with the given id, resolved at build time."""
        FormNode.validate_id(field_id)
        self._field_id = field_id
        return self

    def get_field(self):
        if self._field is None:
            if self._field_id is None:
                raise RuntimeError(f"{self!r} has no field.")
            self._resolve_field()
        return self._field

    def get_field_id(self) -> str:
        if self._field_id is None:
            raise RuntimeError(f"{self!r} has no field.")
        return self._field_id

    def dependent_node(self, node):
        self._dependent_node = node
        return self

    def get_dependent_node(self):
        if self._dependent_node is None:
            raise RuntimeError(f"{self!r} has no dependent node.")
        return self._dependent_node

    def _resolve_field(self):
        from .field import AbstractFormField

        document = self.get_dependent_node().get_document()
        node = document.get_node_by_id(self._field_id)
        if node is None:
            raise ValueError(f"Unknown field with id '{self._field_id}' for {self!r}.")
        if not isinstance(node, AbstractFormField):
            raise ValueError(
                f"Node '{self._field_id}' of {self!r} is not a form field."
            )
        self._field = node

    def populate(self):
        if self._field is None:
            self._resolve_field()
        return self

    def check(self) -> bool:
        """True if the dependency is met by the current field value."""
        raise NotImplementedError


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value is False or (
        isinstance(value, (list, tuple, set, dict)) and not value
    )


class EmptyFormFieldDependency(FormFieldDependency):
    """Met if the field has no value, or an empty one."""

    def check(self) -> bool:
        return _is_empty(self.get_field().get_value())


class NonEmptyFormFieldDependency(FormFieldDependency):
    """Met if the field has a nonempty value."""

    def check(self) -> bool:
        return not _is_empty(self.get_field().get_value())


class ValueFormFieldDependency(FormFieldDependency):
    """Met if the field has one of the given values.

    For fields with several values (a list) it suffices that one of them
    is among the given values.  Negating the dependency means it is met
    if the field has none of the values.  Values are compared as
    strings, so ``5`` matches ``"5"``.
    """

    def __init__(self):
        super().__init__()
        self._values: list[Any] | None = None
        self._negated = False

    def values(self, values):
        values = list(values)
        if not values:
            raise ValueError("Possible values cannot be empty.")
        self._values = values
        return self

    def get_values(self) -> list[Any]:
        if self._values is None:
            raise RuntimeError(f"{self!r} has no values.")
        return self._values

    def negate(self, negate: bool = True):
        self._negated = bool(negate)
        return self

    def is_negated(self) -> bool:
        return self._negated

    def _matches(self, value) -> bool:
        if value is None:
            return None in self.get_values()
        return str(value) in {str(v) for v in self.get_values() if v is not None}

    def check(self) -> bool:
        value = self.get_field().get_value()
        if isinstance(value, (list, tuple, set)):
            met = any(self._matches(v) for v in value)
        else:
            met = self._matches(value)
        if self._negated:
            return not met
        return met
