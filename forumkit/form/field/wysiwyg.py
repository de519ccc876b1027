# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from typing import Any

import arrow

from forumkit.misc_utils import escape_html, html_attributes, trim
from ..data import CustomFormDataProcessor
from ..html_input import HtmlInputProcessor
from ..objecttype import ObjectTypeFormNode
from ..validation import FormFieldValidationError
from .abstract import AbstractFormField
from .length import MaximumLengthFormField, MinimumLengthFormField


class WysiwygFormField(
    MinimumLengthFormField,
    MaximumLengthFormField,
    ObjectTypeFormNode,
    AbstractFormField,
):
    """A wysiwyg editor for messages.

    The value is message html.  It is not stored in a column directly;
    instead validation runs it through an :class:`HtmlInputProcessor`
    which is passed on in the form data as
    ``<object property>_htmlInputProcessor``.  The object type names the
    kind of message and must belong to the ``forumkit.message``
    definition.
    """

    template_name = "__wysiwygFormField"

    def __init__(self):
        super().__init__()
        self._value = ""
        self._autosave_id = ""
        self._last_edit_time = 0
        self._support_attachments = False
        self._support_mentions = False
        self._html_input_processor: HtmlInputProcessor | None = None

    def autosave_id(self, autosave_id: str):
        """Set the identifier used to autosave the value; empty disables autosave."""
        self._autosave_id = autosave_id
        return self

    def get_autosave_id(self) -> str:
        return self._autosave_id

    def last_edit_time(self, last_edit_time: int | arrow.Arrow):
        """Set when the value was last edited, as a unix timestamp or Arrow."""
        if isinstance(last_edit_time, arrow.Arrow):
            last_edit_time = int(last_edit_time.timestamp())
        self._last_edit_time = int(last_edit_time)
        return self

    def get_last_edit_time(self) -> int:
        """The last edit time, 0 if unknown."""
        return self._last_edit_time

    def support_attachments(self, support: bool = True):
        self._support_attachments = bool(support)
        return self

    def supports_attachments(self) -> bool:
        """Whether the editor should offer attachments, by default no.

        This only tells the editor to load its attachment support; the
        attachments themselves are handled elsewhere.
        """
        return self._support_attachments

    def support_mentions(self, support: bool = True):
        self._support_mentions = bool(support)
        return self

    def supports_mentions(self) -> bool:
        return self._support_mentions

    def get_object_type_definition(self) -> str:
        return "forumkit.message"

    def object_value(self, value):
        return value if value is None else str(value)

    def get_html_input_processor(self) -> HtmlInputProcessor | None:
        return self._html_input_processor

    def has_save_value(self) -> bool:
        return False

    def populate(self):
        super().populate()

        def add_input_processor(document, parameters):
            if self.check_dependencies():
                key = self.get_object_property() + "_htmlInputProcessor"
                parameters[key] = self._html_input_processor
            return parameters

        self.get_document().get_data_handler().add_processor(
            CustomFormDataProcessor("wysiwyg", add_input_processor)
        )
        return self

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            if isinstance(value, str):
                self._value = trim(value)
        return self

    def validate(self):
        value = self.get_value() or ""
        if self.is_required() and value == "":
            self.add_validation_error(FormFieldValidationError("empty"))
        elif value:
            self.validate_minimum_length(value)
            self.validate_maximum_length(value)

        self._html_input_processor = HtmlInputProcessor()
        self._html_input_processor.process(value, self.get_object_type().name)

        super().validate()

    def get_html_variables(self) -> dict[str, Any]:
        last_edit = ""
        if self._last_edit_time:
            last_edit = arrow.get(self._last_edit_time).isoformat()
        return {
            "autosaveId": self._autosave_id,
            "lastEditTime": last_edit,
            "supportAttachments": self._support_attachments,
            "supportMentions": self._support_mentions,
        }

    def get_field_html(self) -> str:
        attrs = self.input_attributes()
        attrs["class"] = " ".join(["wysiwygTextarea"] + self._classes)
        v = self.get_html_variables()
        if v["autosaveId"]:
            attrs["data-autosave"] = v["autosaveId"]
            if v["lastEditTime"]:
                attrs["data-autosave-last-edit-time"] = v["lastEditTime"]
        if v["supportAttachments"]:
            attrs["data-support-attachments"] = "true"
        if v["supportMentions"]:
            attrs["data-support-mention"] = "true"
        if self._maximum_length is not None:
            attrs["maxlength"] = self._maximum_length
        return "<textarea{}>{}</textarea>".format(
            html_attributes(attrs), escape_html(self.get_value())
        )
