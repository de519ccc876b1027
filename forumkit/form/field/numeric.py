# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

import re

from forumkit.misc_utils import html_attributes, trim
from ..validation import FormFieldValidationError
from .abstract import AbstractFormField


_integer_re = re.compile(r"^[+-]?[0-9]+\Z")


class IntegerFormField(AbstractFormField):
    """An integer, optionally bounded and restricted to steps.

    Input that is not an integer is read as no value at all.
    """

    template_name = "__numericFormField"

    def __init__(self):
        super().__init__()
        self._minimum: int | None = None
        self._maximum: int | None = None
        self._step: int | None = None

    def minimum(self, minimum: int | None):
        if (
            minimum is not None
            and self._maximum is not None
            and minimum > self._maximum
        ):
            raise ValueError(
                f"Minimum ({minimum}) cannot be greater than maximum ({self._maximum})."
            )
        self._minimum = minimum
        return self

    def get_minimum(self) -> int | None:
        return self._minimum

    def maximum(self, maximum: int | None):
        if (
            maximum is not None
            and self._minimum is not None
            and maximum < self._minimum
        ):
            raise ValueError(
                f"Maximum ({maximum}) cannot be smaller than minimum ({self._minimum})."
            )
        self._maximum = maximum
        return self

    def get_maximum(self) -> int | None:
        return self._maximum

    def step(self, step: int | None):
        if step is not None and step <= 0:
            raise ValueError(f"Step must be positive, {step} given.")
        self._step = step
        return self

    def get_step(self) -> int | None:
        return self._step

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            if isinstance(value, int) and not isinstance(value, bool):
                self._value = value
                return self
            value = trim(str(value))
            if _integer_re.match(value):
                self._value = int(value)
            else:
                self._value = None
        return self

    def validate(self):
        value = self.get_value()
        if value is None:
            if self.is_required():
                self.add_validation_error(FormFieldValidationError("empty"))
            return
        if self._minimum is not None and value < self._minimum:
            self.add_validation_error(
                FormFieldValidationError(
                    "minimum", information={"minimum": self._minimum}
                )
            )
        elif self._maximum is not None and value > self._maximum:
            self.add_validation_error(
                FormFieldValidationError(
                    "maximum", information={"maximum": self._maximum}
                )
            )
        elif self._step is not None and (value - (self._minimum or 0)) % self._step:
            self.add_validation_error(
                FormFieldValidationError("step", information={"step": self._step})
            )

    def get_field_html(self) -> str:
        attrs = {"type": "number"}
        attrs.update(self.input_attributes())
        if self._minimum is not None:
            attrs["min"] = self._minimum
        if self._maximum is not None:
            attrs["max"] = self._maximum
        if self._step is not None:
            attrs["step"] = self._step
        if self.get_value() is not None:
            attrs["value"] = self.get_value()
        return "<input{}>".format(html_attributes(attrs))
