from db.models import Word
from server.views import (
    ADD_WORD_LABEL,
    hello_greeting,
    render_hello_content,
    render_page,
    render_word_content,
)


def test_word_content_lists_words_in_given_order():
    html = render_word_content([Word("Hello"), Word("World!")], text="draft")
    assert html.index("Hello") < html.index("World!")
    assert html.count('<li class="word">') == 2
    assert 'value="draft"' in html
    assert ADD_WORD_LABEL in html


def test_word_content_escapes_text():
    html = render_word_content([Word("<b>x</b>")], text='"quoted"')
    assert "<b>x</b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "&quot;quoted&quot;" in html


def test_render_is_pure():
    words = [Word("a")]
    assert render_word_content(words, "t") == render_word_content(words, "t")
    assert words == [Word("a")]


def test_hello_greeting_only_when_named():
    assert hello_greeting("") is None
    assert hello_greeting("Ana") == "Hello, Ana"
    assert "hello-greeting" not in render_hello_content("")
    assert "Hello, Ana" in render_hello_content("Ana")


def test_page_wraps_body():
    page = render_page("Lista", "<main></main>")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Lista</title>" in page
    assert "/static/app.js" in page
