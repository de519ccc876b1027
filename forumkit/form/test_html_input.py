# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from forumkit.form import HtmlInputProcessor
from forumkit.form.html_input import is_script_url


def process(html):
    return HtmlInputProcessor().process(html, "forumkit.post")


def test_plain_html_kept():
    p = process("<p>Hello <b>world</b></p>")
    assert p.get_html() == "<p>Hello <b>world</b></p>"
    assert p.get_text_content() == "Hello world"


def test_script_removed():
    p = process("<p>Hi</p><script>alert(1)</script><style>p {}</style>")
    assert p.get_html() == "<p>Hi</p>"
    assert "alert" not in p.get_text_content()


def test_nested_dropped_elements():
    p = process("<form><iframe src='x'></iframe><p>x</p></form><p>y</p>")
    assert p.get_html() == "<p>y</p>"


def test_event_handlers_removed():
    p = process('<p onclick="evil()" class="a">Hi</p>')
    assert p.get_html() == '<p class="a">Hi</p>'


def test_script_urls_removed():
    p = process('<a href="java\tscript:evil()">a</a><a href="/x">b</a>')
    assert p.get_html() == '<a>a</a><a href="/x">b</a>'


def test_comments_removed():
    p = process("<p>a<!-- secret -->b</p>")
    assert p.get_html() == "<p>ab</p>"


def test_text_content_lines():
    p = process("<p>One</p><p>Two<br>Three</p><ul><li>Four</li></ul>")
    assert p.get_text_content() == "One\nTwo\nThree\nFour"


def test_empty_input():
    p = process("")
    assert p.get_html() == ""
    assert p.get_text_content() == ""


def test_object_type_and_id():
    p = HtmlInputProcessor().process("<p>x</p>", "forumkit.post", 3)
    assert p.get_object_type() == "forumkit.post"
    assert p.get_object_id() == 3
    p.set_object_id(7)
    assert p.get_object_id() == 7


def test_is_script_url():
    assert is_script_url("javascript:alert(1)")
    assert is_script_url(" JavaScript:alert(1)")
    assert is_script_url("vbscript:x")
    assert not is_script_url("https://example.com/javascript:")
