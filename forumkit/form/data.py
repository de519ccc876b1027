# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Turning form values into data for database objects and back.

The data handler of a document passes a dict through all of its
processors in order.  For submitted forms the dict starts empty and
ends up with the column values under the ``"data"`` key, plus whatever
additional parameters fields need (such as processed message input).
For editing, the data of an existing object passes through the
processors before it is loaded into the fields.
"""

from __future__ import annotations

from typing import Any, Callable

from .node import FormNode, FormParentNode


class FormDataProcessor:
    """Base class of data processors; the default methods change nothing."""

    def process_form_data(
        self, document, parameters: dict[str, Any]
    ) -> dict[str, Any]:
        return parameters

    def process_object_data(
        self, document, data: dict[str, Any], obj
    ) -> dict[str, Any]:
        return data


class DefaultFormDataProcessor(FormDataProcessor):
    """Collect the save values of fields into ``parameters["data"]``.

    Only available fields whose dependencies are met, and which have a
    save value, are collected.  Their object property is the key.
    """

    def process_form_data(self, document, parameters):
        parameters["data"] = {}
        self._collect(document, parameters["data"])
        return parameters

    def _collect(self, node: FormNode, data: dict[str, Any]):
        if not node.is_available() or not node.check_dependencies():
            return
        if isinstance(node, FormParentNode):
            for child in node:
                self._collect(child, data)
        elif hasattr(node, "has_save_value") and node.has_save_value():
            data[node.get_object_property()] = node.get_save_value()


class CustomFormDataProcessor(FormDataProcessor):
    """A data processor defined by callables.

    Args:
        id: identifies the processor.
        form_data_processor: called as ``f(document, parameters)``,
            returns the new parameters.
        object_data_processor: called as ``f(document, data, obj)``,
            returns the new data.

    Raises:
        ValueError: neither callable given, or invalid id.
    """

    def __init__(
        self,
        id: str,
        form_data_processor: Callable | None = None,
        object_data_processor: Callable | None = None,
    ):
        FormNode.validate_id(id)
        if form_data_processor is None and object_data_processor is None:
            raise ValueError(f"No processors given for custom data processor '{id}'.")
        self.id = id
        self._form_data_processor = form_data_processor
        self._object_data_processor = object_data_processor

    def __repr__(self):
        return f"<CustomFormDataProcessor {self.id}>"

    def get_id(self) -> str:
        return self.id

    def process_form_data(self, document, parameters):
        if self._form_data_processor is None:
            return parameters
        return self._form_data_processor(document, parameters)

    def process_object_data(self, document, data, obj):
        if self._object_data_processor is None:
            return data
        return self._object_data_processor(document, data, obj)


class VoidFormDataProcessor(FormDataProcessor):
    """Drop a property from the collected data.

    Args:
        property: the key to remove.
        is_data_property: remove from ``parameters["data"]`` (the default)
            rather than from the top-level parameters.
    """

    def __init__(self, property: str, is_data_property: bool = True):
        self.property = property
        self.is_data_property = is_data_property

    def process_form_data(self, document, parameters):
        if self.is_data_property:
            parameters.get("data", {}).pop(self.property, None)
        else:
            parameters.pop(self.property, None)
        return parameters


class FormDataHandler:
    def __init__(self):
        self._processors: list[FormDataProcessor] = []

    def add_processor(self, processor: FormDataProcessor):
        self._processors.append(processor)
        return self

    def get_processors(self) -> list[FormDataProcessor]:
        return list(self._processors)

    def get_form_data(self, document) -> dict[str, Any]:
        """Run the submitted values of the document through all processors.

        Raises:
            TypeError: a processor did not return a dict.
        """
        parameters: dict[str, Any] = {}
        for processor in self._processors:
            parameters = processor.process_form_data(document, parameters)
            if not isinstance(parameters, dict):
                raise TypeError(
                    f"{processor!r} returned {type(parameters).__name__}, not dict"
                )
        return parameters

    def get_object_data(self, document, obj) -> dict[str, Any]:
        """Run the data of an object through all processors before loading it."""
        data = dict(obj.get_data())
        for processor in self._processors:
            data = processor.process_object_data(document, data, obj)
            if not isinstance(data, dict):
                raise TypeError(
                    f"{processor!r} returned {type(data).__name__}, not dict"
                )
        return data
