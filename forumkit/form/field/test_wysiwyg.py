# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

import arrow
from pytest import raises

from forumkit.form import (
    BooleanFormField,
    FormDocument,
    HtmlInputProcessor,
    NonEmptyFormFieldDependency,
    object_type_registry,
)
from forumkit.form.field import WysiwygFormField


object_type_registry.register("forumkit.message", "test.wysiwyg.post")


def make_field():
    return WysiwygFormField.create("text").object_type("test.wysiwyg.post")


def submit(doc, data):
    doc.request_data(data)
    doc.read_values()
    doc.validate()
    return doc.get_data()


def test_object_type():
    f = make_field()
    assert f.get_object_type().name == "test.wysiwyg.post"
    assert f.get_object_type().definition == "forumkit.message"
    raises(RuntimeError, lambda: f.object_type("test.wysiwyg.post"))
    raises(ValueError, lambda: WysiwygFormField.create("a").object_type("nope"))
    raises(RuntimeError, WysiwygFormField.create("a").get_object_type)


def test_processes_input():
    f = make_field()
    doc = FormDocument.create("doc").append_child(f).build()
    data = submit(doc, {"text": " <p>Hello</p><script>x</script> "})
    assert not f.has_validation_errors()
    processor = data["text_htmlInputProcessor"]
    assert isinstance(processor, HtmlInputProcessor)
    assert processor is f.get_html_input_processor()
    assert processor.get_html() == "<p>Hello</p>"
    assert processor.get_object_type() == "test.wysiwyg.post"
    # the html is not a column of the object
    assert data["data"] == {}


def test_object_property_names_processor():
    f = make_field().object_property("message")
    doc = FormDocument.create("doc").append_child(f).build()
    data = submit(doc, {"text": "<p>x</p>"})
    assert "message_htmlInputProcessor" in data


def test_required():
    f = make_field().required()
    doc = FormDocument.create("doc").append_child(f).build()
    submit(doc, {"text": "   "})
    assert [e.get_type() for e in f.get_validation_errors()] == ["empty"]


def test_lengths():
    f = make_field().maximum_length(10)
    doc = FormDocument.create("doc").append_child(f).build()
    submit(doc, {"text": "<p>Hello world</p>"})
    assert [e.get_type() for e in f.get_validation_errors()] == ["maximumLength"]


def test_dependency_not_met():
    flag = BooleanFormField.create("flag")
    f = make_field()
    f.add_dependency(NonEmptyFormFieldDependency.create("flagSet").field(flag))
    doc = FormDocument.create("doc").append_children([flag, f]).build()
    data = submit(doc, {"flag": "0", "text": "<p>x</p>"})
    assert "text_htmlInputProcessor" not in data
    assert f.get_html_input_processor() is None


def test_settings():
    f = make_field()
    assert not f.supports_attachments()
    assert not f.supports_mentions()
    assert f.get_autosave_id() == ""
    assert f.get_last_edit_time() == 0
    f.support_attachments().support_mentions().autosave_id("draft-1")
    f.last_edit_time(arrow.get(1700000000))
    assert f.supports_attachments()
    assert f.supports_mentions()
    assert f.get_last_edit_time() == 1700000000
    assert f.get_html_variables() == {
        "autosaveId": "draft-1",
        "lastEditTime": "2023-11-14T22:13:20+00:00",
        "supportAttachments": True,
        "supportMentions": True,
    }


def test_html():
    f = make_field().autosave_id("draft-1").last_edit_time(1700000000).value("<b>")
    f.support_mentions().maximum_length(500)
    FormDocument.create("doc").append_child(f).build()
    html = f.get_html()
    assert (
        '<textarea id="text" name="text" class="wysiwygTextarea"'
        ' data-autosave="draft-1"'
        ' data-autosave-last-edit-time="2023-11-14T22:13:20+00:00"'
        ' data-support-mention="true" maxlength="500">&lt;b&gt;</textarea>'
    ) in html


def test_loaded_from_non_string():
    f = make_field().maximum_length(1)
    doc = FormDocument.create("doc").append_child(f).build()
    doc.load_values({"text": 42}, None)
    assert f.get_value() == "42"
    doc.validate()
    assert [e.get_type() for e in f.get_validation_errors()] == ["maximumLength"]
