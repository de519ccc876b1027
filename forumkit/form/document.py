# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from collections import Counter
import logging
from typing import Any

from forumkit.misc_utils import html_attributes
from .data import FormDataHandler, DefaultFormDataProcessor
from .node import FormButton, FormNode, FormParentNode


log = logging.getLogger("form")


class FormDocument(FormParentNode):
    """The root node of a form.

    A document is built once, after all nodes have been added, which
    populates every node.  Then values are read from the request data,
    validated, and the collected data is obtained from :meth:`get_data`.
    """

    FORM_MODE_CREATE = "create"
    FORM_MODE_UPDATE = "update"

    template_name = "__form"

    def __init__(self):
        super().__init__()
        self._action: str | None = None
        self._method = "post"
        self._ajax = False
        self._prefix: str | None = None
        self._form_mode: str | None = None
        self._request_data: dict[str, Any] | None = None
        self._data_handler: FormDataHandler | None = None
        self._buttons: list[FormButton] = []
        self._add_default_button = True
        self._built = False
        self._show_success_message = False

    def get_document(self):
        return self

    # settings

    def action(self, action: str):
        self._action = action
        return self

    def get_action(self) -> str | None:
        """The url the form is submitted to.

        Raises:
            RuntimeError: no action set for a non-ajax form.
        """
        if self._action is None and not self._ajax:
            raise RuntimeError("Action has not been set.")
        return self._action

    def method(self, method: str):
        if method not in ("get", "post"):
            raise ValueError(f"Invalid method '{method}' given.")
        self._method = method
        return self

    def get_method(self) -> str:
        return self._method

    def ajax(self, ajax: bool = True):
        self._ajax = bool(ajax)
        return self

    def is_ajax(self) -> bool:
        return self._ajax

    def prefix(self, prefix: str):
        """Set the global prefix of the names of all fields."""
        self.validate_id(prefix)
        self._prefix = prefix
        return self

    def get_prefix(self) -> str:
        if not self._prefix:
            return ""
        return self._prefix + "_"

    def form_mode(self, form_mode: str):
        """Set whether the form creates a new object or updates an existing one.

        Raises:
            RuntimeError: the mode has already been set.
            ValueError: unknown mode.
        """
        if self._form_mode is not None:
            raise RuntimeError("Form mode has already been set.")
        if form_mode not in (self.FORM_MODE_CREATE, self.FORM_MODE_UPDATE):
            raise ValueError(f"Unknown form mode '{form_mode}' given.")
        self._form_mode = form_mode
        return self

    def get_form_mode(self) -> str:
        if self._form_mode is None:
            self._form_mode = self.FORM_MODE_CREATE
        return self._form_mode

    def show_success_message(self, show: bool = True):
        self._show_success_message = bool(show)
        return self

    # buttons

    def add_default_button(self, add: bool = True):
        """Whether building adds a "Submit" button, the default."""
        if self._built:
            raise RuntimeError("Form document has already been built.")
        self._add_default_button = bool(add)
        return self

    def add_button(self, button: FormButton):
        if not isinstance(button, FormButton):
            raise TypeError(f"Cannot add {type(button).__name__} as a button.")
        if self.get_node_by_id(button.get_id()) is not None:
            raise ValueError(f"Node id '{button.get_id()}' is already used.")
        button.parent(self)
        if self._built:
            button.populate()
        self._buttons.append(button)
        return self

    def get_buttons(self) -> list[FormButton]:
        return list(self._buttons)

    def get_node_by_id(self, node_id: str) -> FormNode | None:
        node = super().get_node_by_id(node_id)
        if node is not None:
            return node
        for button in self._buttons:
            if button.get_id() == node_id:
                return button
        return None

    # life cycle

    def build(self):
        """Finish construction and populate all nodes.

        Raises:
            RuntimeError: already built.
            ValueError: two nodes share an id.
        """
        if self._built:
            raise RuntimeError("Form document has already been built.")
        if self._add_default_button:
            self.add_button(
                FormButton.create("submitButton")
                .label("Submit")
                .access_key("s")
                .submit()
                .add_class("buttonPrimary")
            )
        ids = Counter(node.get_id() for node in self.iter_nodes())
        ids.update(b.get_id() for b in self._buttons)
        dupes = [i for i, n in ids.items() if n > 1]
        if dupes:
            raise ValueError(f"Node ids used more than once: {', '.join(dupes)}")
        self.populate()
        for button in self._buttons:
            button.populate()
        self._built = True
        log.debug("Built form document '%s' with %d nodes", self.get_id(), len(ids))
        return self

    def is_built(self) -> bool:
        return self._built

    # data

    def request_data(self, request_data: dict[str, Any]):
        """Set the submitted data, keyed by prefixed ids.

        Raises:
            RuntimeError: request data has already been set.
        """
        if self._request_data is not None:
            raise RuntimeError("Request data has already been set.")
        self._request_data = dict(request_data)
        return self

    def has_request_data(self, index: str | None = None) -> bool:
        if self._request_data is None:
            return False
        if index is None:
            return bool(self._request_data)
        return index in self._request_data

    def get_request_data(self, index: str | None = None):
        """All request data, or the value for one prefixed id.

        Raises:
            ValueError: no request data for the given index.
        """
        if self._request_data is None:
            self._request_data = {}
        if index is None:
            return self._request_data
        if index not in self._request_data:
            raise ValueError(f"Unknown request data with index '{index}'.")
        return self._request_data[index]

    def read_values(self):
        if self._request_data is None:
            self._request_data = {}
        return super().read_values()

    def validate(self):
        super().validate()
        if self.has_validation_errors():
            log.debug("Form document '%s' has validation errors", self.get_id())

    def get_data_handler(self) -> FormDataHandler:
        if self._data_handler is None:
            self._data_handler = FormDataHandler()
            self._data_handler.add_processor(DefaultFormDataProcessor())
        return self._data_handler

    def get_data(self) -> dict[str, Any]:
        """The data of the form, as collected by the data processors."""
        return self.get_data_handler().get_form_data(self)

    def load_values(self, data: dict[str, Any], obj):
        """Set field values from an object's (processed) data."""
        if self._form_mode is None:
            self.form_mode(self.FORM_MODE_UPDATE)
        for node in self.iter_nodes():
            if hasattr(node, "updated_object"):
                node.updated_object(data, obj)
        return self

    def updated_object(self, obj, load_values: bool = True):
        """Prepare the form for editing the given object."""
        if self._form_mode is None:
            self.form_mode(self.FORM_MODE_UPDATE)
        if load_values:
            data = self.get_data_handler().get_object_data(self, obj)
            self.load_values(data, obj)
        return self

    # output

    def render(self) -> str:
        if not self._built:
            raise RuntimeError("Form document has not been built.")
        attrs: dict[str, Any] = {"id": self.get_id()}
        if self._classes:
            attrs["class"] = " ".join(self._classes)
        attrs.update(self._attributes)
        parts = []
        if self.has_validation_errors():
            parts.append('<p class="error" role="alert">The form contains errors.</p>')
        elif self._show_success_message:
            parts.append('<p class="success">Your changes have been saved.</p>')
        body = self.render_children()
        if body:
            parts.append(body)
        buttons = [b.get_html() for b in self._buttons]
        buttons = [b for b in buttons if b]
        if buttons:
            parts.append('<div class="formSubmit">{}</div>'.format("".join(buttons)))
        if self._ajax:
            return "<div{}>\n{}\n</div>".format(
                html_attributes(attrs), "\n".join(parts)
            )
        form_attrs = {"method": self._method, "action": self.get_action()}
        form_attrs.update(attrs)
        return "<form{}>\n{}\n</form>".format(
            html_attributes(form_attrs), "\n".join(parts)
        )

