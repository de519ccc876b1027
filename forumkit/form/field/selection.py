# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Callable

from forumkit.misc_utils import escape_html, html_attributes
from ..validation import FormFieldValidationError
from .abstract import AbstractFormField


class SingleSelectionFormField(AbstractFormField):
    """Pick one of several options.

    Options map values to labels.  They can be given as a dict, a list
    of ``(value, label)`` pairs, or a callable returning either, which
    is called when the options are set.  Without options the field is
    unavailable.
    """

    template_name = "__singleSelectionFormField"

    def __init__(self):
        super().__init__()
        self._options: dict[Any, str] = {}

    def options(self, options: dict | list | Callable):
        if callable(options):
            options = options()
        if isinstance(options, dict):
            self._options = dict(options)
        elif isinstance(options, (list, tuple)):
            self._options = dict(options)
        else:
            raise TypeError(
                f"Options must be a dict or a list, not {type(options).__name__}."
            )
        return self

    def get_options(self) -> dict[Any, str]:
        return dict(self._options)

    def is_available(self) -> bool:
        return super().is_available() and bool(self._options)

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            # request data are strings, the option keys need not be
            for key in self._options:
                if str(key) == str(value):
                    value = key
                    break
            self._value = value
        return self

    def validate(self):
        value = self.get_value()
        if value is None or value == "":
            if self.is_required():
                self.add_validation_error(FormFieldValidationError("empty"))
        elif not isinstance(value, Hashable) or value not in self._options:
            self.add_validation_error(FormFieldValidationError("invalidValue"))

    def get_field_html(self) -> str:
        opts = []
        for key, label in self._options.items():
            attrs: dict[str, Any] = {"value": key}
            if key == self.get_value():
                attrs["selected"] = None
            opts.append(
                "<option{}>{}</option>".format(
                    html_attributes(attrs), escape_html(label)
                )
            )
        return "<select{}>{}</select>".format(
            html_attributes(self.input_attributes()), "".join(opts)
        )
