# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from forumkit.misc_utils import escape_html, html_attributes, trim
from ..validation import FormFieldValidationError
from .abstract import AbstractFormField
from .length import MaximumLengthFormField, MinimumLengthFormField


class TextFormField(MinimumLengthFormField, MaximumLengthFormField, AbstractFormField):
    """A single line of text, trimmed when read."""

    template_name = "__textFormField"
    input_type = "text"

    def __init__(self):
        super().__init__()
        self._value = ""
        self._placeholder: str | None = None

    def placeholder(self, placeholder: str | None):
        self._placeholder = placeholder
        return self

    def get_placeholder(self) -> str | None:
        return self._placeholder

    def object_value(self, value):
        return value if value is None else str(value)

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            if isinstance(value, str):
                self._value = trim(value)
        return self

    def validate(self):
        value = self.get_value()
        if value is None or value == "":
            if self.is_required():
                self.add_validation_error(FormFieldValidationError("empty"))
            return
        self.validate_minimum_length(value)
        self.validate_maximum_length(value)

    def input_attributes(self):
        attrs = super().input_attributes()
        if self._minimum_length is not None:
            attrs["minlength"] = self._minimum_length
        if self._maximum_length is not None:
            attrs["maxlength"] = self._maximum_length
        if self._placeholder:
            attrs["placeholder"] = self._placeholder
        return attrs

    def get_field_html(self) -> str:
        attrs = {"type": self.input_type}
        attrs.update(self.input_attributes())
        attrs["value"] = self.get_value()
        return "<input{}>".format(html_attributes(attrs))


class TextareaFormField(TextFormField):
    """Several lines of text."""

    template_name = "__textareaFormField"

    def __init__(self):
        super().__init__()
        self._rows = 10

    def rows(self, rows: int):
        if rows < 1:
            raise ValueError(f"Number of rows must be positive, {rows} given.")
        self._rows = rows
        return self

    def get_rows(self) -> int:
        return self._rows

    def get_field_html(self) -> str:
        attrs = self.input_attributes()
        attrs["rows"] = self._rows
        return "<textarea{}>{}</textarea>".format(
            html_attributes(attrs), escape_html(self.get_value())
        )
