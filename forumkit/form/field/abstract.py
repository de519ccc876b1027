# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from typing import Any

from forumkit.misc_utils import escape_html, html_attributes
from ..node import FormChildNode, FormElement
from ..validation import FormFieldValidationError, FormFieldValidator


class AbstractFormField(FormElement, FormChildNode):
    """A form node storing a value.

    Subclasses read their value from the request data, validate it and
    render their input element in :meth:`get_field_html`.  The generic
    checks done by :meth:`validate` are left to the subclasses; the
    validators added with :meth:`add_validator` are run by the parent
    node afterwards.
    """

    def __init__(self):
        super().__init__()
        self._value: Any = None
        self._validation_errors: list[FormFieldValidationError] = []
        self._validators: dict[str, FormFieldValidator] = {}
        self._required = False
        self._immutable = False
        self._auto_focus = False
        self._object_property: str | None = None

    # value

    def value(self, value):
        self._value = value
        return self

    def get_value(self):
        return self._value

    def get_save_value(self):
        """The value as it is stored in the database, by default the value."""
        return self.get_value()

    def has_save_value(self) -> bool:
        """True if the value can be stored in a column of the object's table.

        Fields returning False usually add their own data processor to
        the document when populated.
        """
        return True

    def object_property(self, object_property: str | None):
        """Set the name of the object property this field edits, the id by default."""
        if object_property == "":
            object_property = None
        if object_property is not None:
            self.validate_id(object_property)
        self._object_property = object_property
        return self

    def get_object_property(self) -> str:
        if self._object_property is not None:
            return self._object_property
        return self.get_id()

    def read_value(self):
        """Read the value from the request data of the document."""
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            self._value = document.get_request_data(self.get_prefixed_id())
        return self

    def read_values(self):
        if not self.is_immutable():
            self.read_value()
        return self

    def object_value(self, value):
        """Convert a property value of an object into a value of this field."""
        return value

    def load_value_from_object(self, obj):
        """Take the value from the object's property, if it has one."""
        data = obj.get_data()
        if self.get_object_property() in data:
            self.value(self.object_value(data[self.get_object_property()]))
        return self

    def updated_object(self, data: dict[str, Any], obj, load_values: bool = True):
        if load_values and self.get_object_property() in data:
            self.value(self.object_value(data[self.get_object_property()]))
        return self

    # flags

    def auto_focus(self, auto_focus: bool = True):
        self._auto_focus = bool(auto_focus)
        return self

    def is_auto_focused(self) -> bool:
        return self._auto_focus

    def immutable(self, immutable: bool = True):
        self._immutable = bool(immutable)
        return self

    def is_immutable(self) -> bool:
        return self._immutable

    def required(self, required: bool = True):
        self._required = bool(required)
        return self

    def is_required(self) -> bool:
        return self._required

    # validation

    def add_validation_error(self, error: FormFieldValidationError):
        self._validation_errors.append(error)
        return self

    def get_validation_errors(self) -> list[FormFieldValidationError]:
        return list(self._validation_errors)

    def has_validation_errors(self) -> bool:
        return bool(self._validation_errors)

    def add_validator(self, validator: FormFieldValidator):
        if validator.get_id() in self._validators:
            raise ValueError(
                f"Validator with id '{validator.get_id()}' already exists."
            )
        self._validators[validator.get_id()] = validator
        return self

    def has_validator(self, validator_id: str) -> bool:
        self.validate_id(validator_id)
        return validator_id in self._validators

    def remove_validator(self, validator_id: str):
        if not self.has_validator(validator_id):
            raise ValueError(f"Unknown validator with id '{validator_id}'.")
        del self._validators[validator_id]
        return self

    def get_validators(self) -> list[FormFieldValidator]:
        return list(self._validators.values())

    def run_validators(self):
        if self._validation_errors:
            return
        for validator in self._validators.values():
            validator(self)
            if self._validation_errors:
                break

    # output

    def input_attributes(self) -> dict[str, Any]:
        """The common attributes of the field's input element."""
        attrs: dict[str, Any] = {
            "id": self.get_prefixed_id(),
            "name": self.get_prefixed_id(),
        }
        if self._classes:
            attrs["class"] = " ".join(self._classes)
        attrs.update(self._attributes)
        if self._required:
            attrs["required"] = None
        if self._auto_focus:
            attrs["autofocus"] = None
        if self._immutable:
            attrs["disabled"] = None
        return attrs

    def get_field_html(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} has no input element")

    def render(self) -> str:
        dl_classes = ["formError"] if self._validation_errors else []
        attrs: dict[str, Any] = {"id": self.get_prefixed_id() + "Container"}
        if dl_classes:
            attrs["class"] = " ".join(dl_classes)
        if not self.check_dependencies():
            attrs["hidden"] = None
        label = ""
        if self._label:
            label = '<label for="{}">{}</label>'.format(
                escape_html(self.get_prefixed_id()), self.render_label()
            )
        dd = [self.get_field_html()]
        if self._description:
            dd.append("<small>{}</small>".format(escape_html(self._description)))
        dd.extend(e.get_html() for e in self._validation_errors)
        return "<dl{}><dt>{}</dt><dd>{}</dd></dl>".format(
            html_attributes(attrs), label, "".join(dd)
        )
