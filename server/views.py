from html import escape

from db.models import Word

ADD_WORD_LABEL = "Agregar palabra"


def render_page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="es">\n'
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f"  <title>{escape(title)}</title>\n"
        '  <script src="/static/app.js" defer></script>\n'
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def render_word_list(words: list[Word]) -> str:
    items = "".join(f'<li class="word">{escape(w.word)}</li>' for w in words)
    return f'<ul id="words">{items}</ul>'


def render_word_content(words: list[Word], text: str = "") -> str:
    """Input, add button and one line per word, in the order given."""
    return (
        '<main id="word-screen">'
        '<form id="word-form">'
        f'<input id="word-input" name="word" type="text" value="{escape(text)}" autocomplete="off">'
        f'<button id="word-add" type="submit">{escape(ADD_WORD_LABEL)}</button>'
        "</form>"
        f"{render_word_list(words)}"
        "</main>"
    )


def hello_greeting(name: str) -> str | None:
    return f"Hello, {name}" if name else None


def render_hello_content(name: str) -> str:
    greeting = hello_greeting(name)
    heading = f'<h2 id="hello-greeting">{escape(greeting)}</h2>' if greeting else ""
    return (
        '<main id="hello-screen">'
        f"{heading}"
        '<label for="hello-name">Name</label>'
        f'<input id="hello-name" name="name" type="text" value="{escape(name)}">'
        "</main>"
    )
