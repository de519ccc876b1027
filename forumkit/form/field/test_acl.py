# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from forumkit.form import FormDocument, TextFormField
from forumkit.form.field import SimpleAclFormField, simple_acl_output_values


def make_form():
    doc = FormDocument.create("doc")
    doc.append_children(
        [TextFormField.create("title"), SimpleAclFormField.create("acl")]
    )
    return doc.build()


def test_output_values():
    assert simple_acl_output_values(None) == {"allowAll": True, "user": [], "group": []}
    values = simple_acl_output_values(
        {"allowAll": "0", "user": ["3", 1, "x", 3], "group": (2,)}
    )
    assert values == {"allowAll": False, "user": [1, 3], "group": [2]}


def test_acl_data_parameter():
    doc = make_form()
    value = {"allowAll": "0", "user": ["1"]}
    doc.request_data({"title": "t", "acl": value})
    doc.read_values()
    doc.validate()
    data = doc.get_data()
    assert data["acl"] == value
    # not a column of the object
    assert data["data"] == {"title": "t"}


def test_acl_empty_not_passed_on():
    doc = make_form()
    doc.request_data({"title": "t", "acl": {}})
    doc.read_values()
    assert "acl" not in doc.get_data()


def test_acl_ignores_non_dict():
    doc = make_form()
    doc.request_data({"acl": "everyone"})
    doc.read_values()
    assert doc.get_node_by_id("acl").get_value() is None


def test_acl_html_variables():
    doc = make_form()
    f = doc.get_node_by_id("acl").value({"allowAll": False, "group": [4]})
    v = f.get_html_variables()
    assert v["__aclSimplePrefix"] == "acl"
    assert v["__aclInputName"] == "acl"
    assert v["aclValues"] == {"allowAll": False, "user": [], "group": [4]}


def test_acl_html():
    doc = make_form()
    f = doc.get_node_by_id("acl").value({"user": [3]})
    html = f.get_html()
    assert html.startswith('<div id="acl" class="aclSimple">')
    assert (
        '<input type="checkbox" name="acl[allowAll]" value="1" id="acl_allowAll"'
        " checked>"
    ) in html
    assert '<input type="hidden" name="acl[user][]" value="3">' in html
    # renders its own sections
    assert "<dl" not in html.split("<section", 1)[0]


def test_acl_ignores_malformed_ids():
    values = simple_acl_output_values(
        {"allowAll": "0", "user": ["²", "-1", " 7 ", "+2"], "group": ["1.5"]}
    )
    assert values == {"allowAll": False, "user": [7], "group": []}
    doc = make_form()
    doc.request_data({"acl": {"allowAll": "0", "user": ["²", "5"]}})
    doc.read_values()
    html = doc.get_node_by_id("acl").get_html()
    assert '<input type="hidden" name="acl[user][]" value="5">' in html
    assert "²" not in html
