# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from forumkit.misc_utils import html_attributes
from ..validation import FormFieldValidationError
from .abstract import AbstractFormField


class BooleanFormField(AbstractFormField):
    """A yes/no choice, stored as 1 or 0.

    A required boolean field has to be answered with yes.
    """

    template_name = "__booleanFormField"

    def __init__(self):
        super().__init__()
        self._value = False

    def value(self, value):
        self._value = bool(value) and value not in ("0", "false")
        return self

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            self._value = value in (1, True, "1", "true", "on")
        return self

    def get_save_value(self):
        return 1 if self._value else 0

    def validate(self):
        if self.is_required() and not self._value:
            self.add_validation_error(FormFieldValidationError("empty"))

    def get_field_html(self) -> str:
        base = self.input_attributes()
        name = base.pop("name")
        pid = base.pop("id")
        radios = []
        for suffix, value, text, checked in (
            ("", "1", "Yes", self._value),
            ("_no", "0", "No", not self._value),
        ):
            attrs = {"type": "radio", "id": pid + suffix, "name": name, "value": value}
            attrs.update(base)
            if checked:
                attrs["checked"] = None
            radios.append(
                "<label><input{}> {}</label>".format(html_attributes(attrs), text)
            )
        return '<ol class="flexibleButtonGroup">{}</ol>'.format(
            "".join(f"<li>{r}</li>" for r in radios)
        )
