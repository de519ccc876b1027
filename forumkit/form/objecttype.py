# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Object types: named kinds of things, such as the kinds of messages.

Object types are grouped by definition.  For example the definition
``forumkit.message`` has one object type per kind of message the
application stores (posts, comments, ...).
"""

from __future__ import annotations

from typing import Any


class ObjectType:
    def __init__(
        self, object_type_id: int, definition: str, name: str, additional_data=None
    ):
        self.object_type_id = object_type_id
        self.definition = definition
        self.name = name
        self.additional_data: dict[str, Any] = additional_data or {}

    def __repr__(self):
        return f"<ObjectType {self.definition}/{self.name}>"


class ObjectTypeRegistry:
    def __init__(self, definitions=()):
        self._types: dict[str, dict[str, ObjectType]] = {}
        self._next_id = 1
        for d in definitions:
            self.add_definition(d)

    def add_definition(self, definition: str):
        self._types.setdefault(definition, {})

    def has_definition(self, definition: str) -> bool:
        return definition in self._types

    def register(self, definition: str, name: str, **additional_data) -> ObjectType:
        """Add an object type to a definition.

        Raises:
            ValueError: no such definition or the name is already taken.
        """
        if definition not in self._types:
            raise ValueError(f"Unknown object type definition '{definition}'.")
        if name in self._types[definition]:
            raise ValueError(f"Object type '{name}' already exists for '{definition}'.")
        ot = ObjectType(self._next_id, definition, name, additional_data)
        self._next_id += 1
        self._types[definition][name] = ot
        return ot

    def get_object_type_by_name(self, definition: str, name: str) -> ObjectType | None:
        return self._types.get(definition, {}).get(name)

    def get_object_types(self, definition: str) -> list[ObjectType]:
        return list(self._types.get(definition, {}).values())


object_type_registry = ObjectTypeRegistry(["forumkit.message"])


class ObjectTypeFormNode:
    """A form node that needs an object type of a specific definition."""

    _object_type: ObjectType | None = None

    def get_object_type_definition(self) -> str:
        raise NotImplementedError

    def object_type(self, name: str):
        """Set the object type by name.

        Raises:
            RuntimeError: the object type has already been set.
            ValueError: no such object type for the node's definition.
        """
        if self._object_type is not None:
            raise RuntimeError("Object type has already been set.")
        definition = self.get_object_type_definition()
        ot = object_type_registry.get_object_type_by_name(definition, name)
        if ot is None:
            raise ValueError(
                f"Unknown object type '{name}' of definition '{definition}'."
            )
        self._object_type = ot
        return self

    def get_object_type(self) -> ObjectType:
        if self._object_type is None:
            raise RuntimeError("Object type has not been set.")
        return self._object_type
