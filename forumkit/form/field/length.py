# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Mixins for fields whose text value has a minimum or maximum length."""

from __future__ import annotations

from ..validation import FormFieldValidationError


def _check_length(length, what):
    if length is None:
        return
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"{what} length must be an int, not {type(length).__name__}.")
    if length < 0:
        raise ValueError(f"{what} length must be non-negative, {length} given.")


class MinimumLengthFormField:
    _minimum_length: int | None = None

    def minimum_length(self, minimum_length: int | None):
        """Set the minimum length of the value, ``None`` for no minimum."""
        _check_length(minimum_length, "Minimum")
        maximum = getattr(self, "_maximum_length", None)
        if minimum_length is not None and maximum is not None:
            if minimum_length > maximum:
                raise ValueError(
                    f"Minimum length ({minimum_length}) cannot be greater "
                    f"than maximum length ({maximum})."
                )
        self._minimum_length = minimum_length
        return self

    def get_minimum_length(self) -> int | None:
        return self._minimum_length

    def validate_minimum_length(self, text: str):
        if self._minimum_length is not None and len(text) < self._minimum_length:
            self.add_validation_error(
                FormFieldValidationError(
                    "minimumLength",
                    information={
                        "length": len(text),
                        "minimumLength": self._minimum_length,
                    },
                )
            )


class MaximumLengthFormField:
    _maximum_length: int | None = None

    def maximum_length(self, maximum_length: int | None):
        """Set the maximum length of the value, ``None`` for no maximum."""
        _check_length(maximum_length, "Maximum")
        minimum = getattr(self, "_minimum_length", None)
        if maximum_length is not None and minimum is not None:
            if maximum_length < minimum:
                raise ValueError(
                    f"Maximum length ({maximum_length}) cannot be smaller "
                    f"than minimum length ({minimum})."
                )
        self._maximum_length = maximum_length
        return self

    def get_maximum_length(self) -> int | None:
        return self._maximum_length

    def validate_maximum_length(self, text: str):
        if self._maximum_length is not None and len(text) > self._maximum_length:
            self.add_validation_error(
                FormFieldValidationError(
                    "maximumLength",
                    information={
                        "length": len(text),
                        "maximumLength": self._maximum_length,
                    },
                )
            )
