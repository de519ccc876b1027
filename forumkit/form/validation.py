# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Validation errors and validators of form fields."""

from __future__ import annotations

from typing import Any, Callable

from forumkit.misc_utils import escape_html
from .node import FormNode


error_item_prefix = "forumkit.form.error."

# English texts of the error language items, keyed by item.  Applications
# may add their own items here.
messages: dict[str, str] = {
    error_item_prefix + "empty": "Please fill in this field.",
    error_item_prefix + "minimumLength": (
        "The value must be at least {minimumLength} characters long, "
        "it is {length}."
    ),
    error_item_prefix + "maximumLength": (
        "The value may be at most {maximumLength} characters long, it is {length}."
    ),
    error_item_prefix + "minimum": "The value must be at least {minimum}.",
    error_item_prefix + "maximum": "The value may be at most {maximum}.",
    error_item_prefix + "step": "The value must be a multiple of {step}.",
    error_item_prefix + "invalidValue": "Please select a valid option.",
}


class _KeepMissing(dict):
    def __missing__(self, key):
        return "{" + key + "}"


class FormFieldValidationError:
    """Something wrong with the value of a field.

    Args:
        type: short name of the error, such as "empty".
        language_item: names the message shown to the user, by default
            ``forumkit.form.error.<type>``.
        information: values substituted into the message.
    """

    def __init__(
        self,
        type: str,
        language_item: str | None = None,
        information: dict[str, Any] | None = None,
    ):
        self.type = type
        self.language_item = language_item or (error_item_prefix + type)
        self.information = information or {}

    def __repr__(self):
        return f"<FormFieldValidationError {self.type}>"

    def get_type(self) -> str:
        return self.type

    def get_language_item(self) -> str:
        return self.language_item

    def get_information(self) -> dict[str, Any]:
        return self.information

    def get_message(self) -> str:
        """The message for the user; unknown items are shown as they are."""
        text = messages.get(self.language_item, self.language_item)
        return text.format_map(_KeepMissing(self.information))

    def get_html(self) -> str:
        return '<small class="innerError">{}</small>'.format(
            escape_html(self.get_message())
        )


class FormFieldValidator:
    """A named check of a field, run after the field's own validation.

    The callable receives the field and reports problems by adding
    validation errors to it.
    """

    def __init__(self, id: str, validator: Callable[[Any], None]):
        FormNode.validate_id(id)
        if not callable(validator):
            raise TypeError(f"Validator '{id}' is not callable.")
        self.id = id
        self._validator = validator

    def __repr__(self):
        return f"<FormFieldValidator {self.id}>"

    def __call__(self, field):
        self._validator(field)

    def get_id(self) -> str:
        return self.id
