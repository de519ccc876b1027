# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from pytest import raises

from forumkit.form import (
    FormButton,
    FormContainer,
    FormDocument,
    TextFormField,
)


def test_valid_ids():
    for good in ("a", "title", "userID", "a_b-c9"):
        TextFormField.create(good)
    for bad in ("", "Title", "9a", "_a", "a b", "a.b"):
        raises(ValueError, lambda: TextFormField.create(bad))


def test_id_set_once():
    f = TextFormField.create("a")
    assert f.get_id() == "a"
    raises(RuntimeError, lambda: f.id("b"))


def test_id_not_set():
    raises(RuntimeError, lambda: TextFormField().get_id())


def test_classes():
    f = TextFormField.create("a").add_class("x").add_classes(["y", "x", "-z"])
    assert f.get_classes() == ["x", "y", "-z"]
    assert f.has_class("y")
    f.remove_class("y").remove_class("notthere")
    assert f.get_classes() == ["x", "-z"]
    raises(ValueError, lambda: f.add_class("1x"))
    raises(ValueError, lambda: f.add_class("a b"))


def test_attributes():
    f = TextFormField.create("a").attribute("data-foo", "bar").attribute("hidden")
    assert f.get_attribute("data-foo") == "bar"
    assert f.get_attribute("hidden") is None
    assert f.has_attribute("hidden")
    assert f.get_attributes() == {"data-foo": "bar", "hidden": None}
    f.attribute("data-foo", 3)
    assert f.get_attribute("data-foo") == "3"
    raises(ValueError, lambda: f.get_attribute("data-bar"))


def test_reserved_attributes():
    f = TextFormField.create("a")
    for name in ("class", "id", "name", "style"):
        raises(ValueError, lambda: f.attribute(name, "x"))
    raises(ValueError, lambda: f.attribute("data foo", "x"))
    raises(ValueError, lambda: f.attribute("data-foo", ["x"]))


def test_parent():
    c = FormContainer.create("c")
    f = TextFormField.create("a")
    assert not f.has_parent()
    raises(RuntimeError, f.get_parent)
    c.append_child(f)
    assert f.get_parent() is c
    raises(RuntimeError, lambda: f.parent(FormContainer.create("d")))


def test_no_document():
    f = TextFormField.create("a")
    raises(RuntimeError, f.get_document)
    raises(RuntimeError, f.get_prefixed_id)


def test_children():
    c = FormContainer.create("c")
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    c.append_children([a, b])
    assert c.children() == [a, b]
    assert list(c) == [a, b]
    assert len(c) == 2
    assert c.has_child("a")
    assert not c.has_child("z")
    assert c.contains_nodes()
    assert not FormContainer.create("e").contains_nodes()


def test_insert_before():
    c = FormContainer.create("c")
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    c.append_child(b)
    c.insert_before(a, "b")
    assert [n.get_id() for n in c] == ["a", "b"]
    raises(ValueError, lambda: c.insert_before(TextFormField.create("x"), "nope"))


def test_append_non_child():
    c = FormContainer.create("c")
    raises(TypeError, lambda: c.append_child(FormDocument.create("doc")))


def test_duplicate_ids_in_subtree():
    c = FormContainer.create("c")
    c.append_child(TextFormField.create("a"))
    raises(ValueError, lambda: c.append_child(TextFormField.create("a")))


def test_duplicate_ids_in_document():
    doc = FormDocument.create("doc")
    c1 = FormContainer.create("c1").append_child(TextFormField.create("a"))
    c2 = FormContainer.create("c2")
    doc.append_children([c1, c2])
    raises(ValueError, lambda: c2.append_child(TextFormField.create("a")))
    raises(ValueError, lambda: c2.append_child(TextFormField.create("doc")))


def test_get_node_by_id():
    doc = FormDocument.create("doc")
    a = TextFormField.create("a")
    doc.append_child(FormContainer.create("c").append_child(a))
    assert doc.get_node_by_id("a") is a
    assert doc.get_node_by_id("nope") is None
    assert [n.get_id() for n in doc.iter_nodes()] == ["c", "a"]


def test_container_availability():
    c = FormContainer.create("c")
    assert not c.is_available()
    f = TextFormField.create("a")
    c.append_child(f)
    assert c.is_available()
    f.available(False)
    assert not c.is_available()
    f.available()
    c.available(False)
    assert not c.is_available()


def test_unavailable_renders_nothing():
    doc = FormDocument.create("doc").action("/x")
    c = FormContainer.create("c").append_child(TextFormField.create("a"))
    doc.append_child(c)
    doc.build()
    assert 'id="aContainer"' in c.get_html()
    c.available(False)
    assert c.get_html() == ""


def test_container_render():
    doc = FormDocument.create("doc").action("/x")
    c = (
        FormContainer.create("c")
        .label("General <info>")
        .description("Stuff")
        .add_class("wide")
        .append_child(TextFormField.create("a"))
    )
    doc.append_child(c)
    doc.build()
    html = c.get_html()
    assert html.startswith('<section id="cContainer" class="section wide">')
    assert '<h2 class="sectionTitle">General &lt;info&gt;</h2>' in html
    assert '<p class="sectionDescription">Stuff</p>' in html


def test_populate_once():
    doc = FormDocument.create("doc")
    f = TextFormField.create("a")
    doc.append_child(f)
    doc.build()
    assert f.is_populated()
    raises(RuntimeError, f.populate)


def test_child_added_after_build_is_populated():
    doc = FormDocument.create("doc")
    c = FormContainer.create("c").append_child(TextFormField.create("a"))
    doc.append_child(c)
    doc.build()
    f = TextFormField.create("b")
    c.append_child(f)
    assert f.is_populated()


def test_button():
    doc = FormDocument.create("doc").action("/x").add_default_button(False)
    b = FormButton.create("preview").label("Preview").access_key("p")
    doc.add_button(b)
    doc.build()
    assert b.get_access_key() == "p"
    assert not b.is_submit()
    assert b.get_html() == (
        '<button type="button" id="preview" name="preview" accesskey="p">'
        "Preview</button>"
    )
    raises(ValueError, lambda: b.access_key("pp"))
