# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from pytest import raises

from forumkit.form import (
    FormDocument,
    FormFieldValidationError,
    FormFieldValidator,
    TextFormField,
)


def test_error_defaults():
    e = FormFieldValidationError("empty")
    assert e.get_type() == "empty"
    assert e.get_language_item() == "forumkit.form.error.empty"
    assert e.get_information() == {}
    assert e.get_message() == "Please fill in this field."


def test_error_message_information():
    e = FormFieldValidationError(
        "minimumLength", information={"length": 2, "minimumLength": 5}
    )
    assert e.get_message() == "The value must be at least 5 characters long, it is 2."


def test_error_custom_item():
    e = FormFieldValidationError("taken", "app.user.error.{name} taken")
    assert e.get_message() == "app.user.error.{name} taken"
    e = FormFieldValidationError("x", "<b>", {"name": "bob"})
    assert e.get_html() == '<small class="innerError">&lt;b&gt;</small>'


def test_validator_needs_callable():
    raises(TypeError, lambda: FormFieldValidator("v", None))
    raises(ValueError, lambda: FormFieldValidator("Not valid", print))


def no_admin(field):
    if field.get_value() == "admin":
        field.add_validation_error(FormFieldValidationError("reserved", "Reserved"))


def no_short(field):
    if len(field.get_value()) < 3:
        field.add_validation_error(FormFieldValidationError("short", "Short"))


def make_form(required=True):
    f = TextFormField.create("username").required(required)
    f.add_validator(FormFieldValidator("noAdmin", no_admin))
    f.add_validator(FormFieldValidator("noShort", no_short))
    return FormDocument.create("doc").append_child(f).build()


def submit(doc, value):
    doc.request_data({"username": value})
    doc.read_values()
    doc.validate()
    return doc.get_node_by_id("username").get_validation_errors()


def test_validators_run():
    assert [e.get_type() for e in submit(make_form(), "admin")] == ["reserved"]
    assert [e.get_type() for e in submit(make_form(), "al")] == ["short"]
    assert submit(make_form(), "alice") == []


def test_validators_not_run_after_field_error():
    assert [e.get_type() for e in submit(make_form(), "")] == ["empty"]


def test_validators_stop_at_first_error():
    def also_short(field):
        field.add_validation_error(FormFieldValidationError("short", "Short"))

    doc = make_form()
    doc.get_node_by_id("username").add_validator(
        FormFieldValidator("alsoShort", also_short)
    )
    assert [e.get_type() for e in submit(doc, "admin")] == ["reserved"]


def test_validator_management():
    f = TextFormField.create("a")
    f.add_validator(FormFieldValidator("v", no_admin))
    assert f.has_validator("v")
    assert [v.get_id() for v in f.get_validators()] == ["v"]
    raises(ValueError, lambda: f.add_validator(FormFieldValidator("v", no_short)))
    f.remove_validator("v")
    assert not f.has_validator("v")
    raises(ValueError, lambda: f.remove_validator("v"))


def test_error_rendered():
    doc = make_form()
    submit(doc, "admin")
    html = doc.get_node_by_id("username").get_html()
    assert 'class="formError"' in html
    assert '<small class="innerError">Reserved</small>' in html
