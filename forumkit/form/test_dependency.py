# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from pytest import raises

from forumkit.form import (
    EmptyFormFieldDependency,
    FormContainer,
    FormDocument,
    IntegerFormField,
    NonEmptyFormFieldDependency,
    SingleSelectionFormField,
    TextFormField,
    ValueFormFieldDependency,
)


def make_form():
    status = SingleSelectionFormField.create("status").options(
        {"open": "Open", "closed": "Closed"}
    )
    reason = TextFormField.create("reason").required()
    reason.add_dependency(
        ValueFormFieldDependency.create("statusClosed").field(status).values(["closed"])
    )
    doc = FormDocument.create("doc").action("/x")
    doc.append_children([status, reason])
    return doc.build()


def submit(doc, data):
    doc.request_data(data)
    doc.read_values()
    doc.validate()


def test_dependency_not_met():
    doc = make_form()
    submit(doc, {"status": "open"})
    reason = doc.get_node_by_id("reason")
    assert not reason.check_dependencies()
    assert not doc.has_validation_errors()
    assert doc.get_data()["data"] == {"status": "open"}
    assert "hidden" in reason.get_html()


def test_dependency_met():
    doc = make_form()
    submit(doc, {"status": "closed", "reason": ""})
    assert doc.get_node_by_id("reason").check_dependencies()
    assert doc.has_validation_errors()


def test_dependency_met_data():
    doc = make_form()
    submit(doc, {"status": "closed", "reason": "Spam"})
    assert doc.get_data()["data"] == {"status": "closed", "reason": "Spam"}


def test_field_by_id():
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    dep = NonEmptyFormFieldDependency.create("aFilled").field_id("a")
    b.add_dependency(dep)
    doc = FormDocument.create("doc")
    doc.append_children([a, b])
    doc.build()
    assert dep.get_field() is a
    assert dep.get_field_id() == "a"
    assert dep.get_dependent_node() is b
    assert not b.check_dependencies()
    a.value("x")
    assert b.check_dependencies()


def test_field_by_unknown_id():
    b = TextFormField.create("b")
    b.add_dependency(NonEmptyFormFieldDependency.create("dep").field_id("nope"))
    doc = FormDocument.create("doc").append_child(b)
    raises(ValueError, doc.build)


def test_field_by_id_not_a_field():
    b = TextFormField.create("b")
    b.add_dependency(NonEmptyFormFieldDependency.create("dep").field_id("c"))
    doc = FormDocument.create("doc")
    doc.append_children([FormContainer.create("c").append_child(b)])
    raises(ValueError, doc.build)


def test_field_must_be_field():
    dep = EmptyFormFieldDependency.create("dep")
    raises(TypeError, lambda: dep.field(FormContainer.create("c")))
    raises(RuntimeError, dep.get_field)
    raises(RuntimeError, dep.get_dependent_node)


def test_empty_dependency():
    a = TextFormField.create("a")
    dep = EmptyFormFieldDependency.create("dep").field(a)
    assert dep.check()
    a.value("x")
    assert not dep.check()
    for empty in (None, 0, False, [], ""):
        a.value(empty)
        assert dep.check()


def test_value_dependency():
    a = TextFormField.create("a")
    dep = ValueFormFieldDependency.create("dep").field(a).values(["x", "y"])
    assert dep.get_values() == ["x", "y"]
    a.value("y")
    assert dep.check()
    a.value("z")
    assert not dep.check()
    a.value(["z", "x"])
    assert dep.check()
    dep.negate()
    assert dep.is_negated()
    assert not dep.check()
    raises(ValueError, lambda: dep.values([]))


def test_value_dependency_compares_strings():
    n = IntegerFormField.create("n").value(5)
    dep = ValueFormFieldDependency.create("dep").field(n).values(["5"])
    assert dep.check()
    n.value(6)
    assert not dep.check()
    n.value(None)
    assert not dep.check()
    dep.values([None])
    assert dep.check()


def test_dependency_on_hidden_field():
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    c = TextFormField.create("c")
    b.add_dependency(NonEmptyFormFieldDependency.create("aFilled").field(a))
    c.add_dependency(NonEmptyFormFieldDependency.create("bFilled").field(b))
    doc = FormDocument.create("doc")
    doc.append_children([a, b, c])
    doc.build()
    b.value("x")
    # b has a value, but is itself hidden
    assert not c.check_dependencies()
    a.value("x")
    assert c.check_dependencies()


def test_container_dependency_hides_children():
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    c = FormContainer.create("c").append_child(b)
    c.add_dependency(NonEmptyFormFieldDependency.create("aFilled").field(a))
    doc = FormDocument.create("doc")
    doc.append_children([a, c])
    doc.build()
    assert not b.check_dependencies()
    a.value("x")
    assert b.check_dependencies()


def test_remove_dependency():
    a = TextFormField.create("a")
    b = TextFormField.create("b")
    b.add_dependency(NonEmptyFormFieldDependency.create("dep").field(a))
    assert b.has_dependency("dep")
    assert len(b.get_dependencies()) == 1
    b.remove_dependency("dep")
    assert not b.has_dependency("dep")
    raises(ValueError, lambda: b.remove_dependency("dep"))
