# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

import re
from typing import Any

from forumkit.misc_utils import escape_html, html_attributes
from ..data import CustomFormDataProcessor
from .abstract import AbstractFormField


_id_re = re.compile(r"^[0-9]+\Z")


def _ids(values) -> list[int]:
    if not isinstance(values, (list, tuple, set)):
        return []
    ids = set()
    for v in values:
        v = str(v).strip()
        if _id_re.match(v):
            ids.add(int(v))
    return sorted(ids)


def simple_acl_output_values(values: dict[str, Any] | None) -> dict[str, Any]:
    """Normalise submitted simple ACL values.

    The result has ``allowAll`` (a bool, True unless explicitly denied)
    and the sorted, unique ``user`` and ``group`` ids that are granted
    access when not everyone is.  Resolving the ids to users and groups
    is up to the application.
    """
    values = values or {}
    allow_all = values.get("allowAll", True)
    if isinstance(allow_all, str):
        allow_all = allow_all.strip() not in ("", "0", "false")
    return {
        "allowAll": bool(allow_all),
        "user": _ids(values.get("user")),
        "group": _ids(values.get("group")),
    }


class SimpleAclFormField(AbstractFormField):
    """Choose who may access something: everyone, or some users and groups.

    The output already consists of sections, so the field should not be
    put into a plain :class:`FormContainer`.  The value is not stored in
    a column; instead it is passed on in the form data under the id of
    the field.
    """

    template_name = "aclSimple"

    def get_html_variables(self):
        return {
            "__aclSimplePrefix": self.get_prefixed_id(),
            "__aclInputName": self.get_prefixed_id(),
            "aclValues": simple_acl_output_values(self.get_value() or {}),
        }

    def has_save_value(self) -> bool:
        return False

    def populate(self):
        super().populate()

        def add_acl_values(document, parameters):
            value = self.get_value()
            if isinstance(value, dict) and value:
                parameters[self.get_id()] = value
            return parameters

        self.get_document().get_data_handler().add_processor(
            CustomFormDataProcessor("simpleAcl", add_acl_values)
        )
        return self

    def read_value(self):
        document = self.get_document()
        if document.has_request_data(self.get_prefixed_id()):
            value = document.get_request_data(self.get_prefixed_id())
            if isinstance(value, dict):
                self._value = value
        return self

    def render(self) -> str:
        return self.get_field_html()

    def get_field_html(self) -> str:
        v = self.get_html_variables()
        name = v["__aclInputName"]
        acl = v["aclValues"]
        allow = {"type": "checkbox", "name": f"{name}[allowAll]", "value": "1"}
        allow["id"] = v["__aclSimplePrefix"] + "_allowAll"
        if acl["allowAll"]:
            allow["checked"] = None
        parts = [
            '<section class="section"><dl><dt></dt><dd>'
            "<label><input{}> Everyone</label></dd></dl></section>".format(
                html_attributes(allow)
            )
        ]
        for kind in ("user", "group"):
            items = "".join(
                '<li><input{}></li>'.format(
                    html_attributes(
                        {"type": "hidden", "name": f"{name}[{kind}][]", "value": i}
                    )
                )
                for i in acl[kind]
            )
            parts.append(
                '<section class="section" data-type="{}"><ul>{}</ul></section>'.format(
                    escape_html(kind), items
                )
            )
        return '<div id="{}" class="aclSimple">{}</div>'.format(
            escape_html(v["__aclSimplePrefix"]), "".join(parts)
        )
