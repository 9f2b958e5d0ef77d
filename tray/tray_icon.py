import logging

import pystray
from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)

ICON_SIZE = 64
ICON_COLOR = "#3a7bd5"


def _create_icon_image(color: str = ICON_COLOR) -> Image.Image:
    img = Image.new("RGBA", (ICON_SIZE, ICON_SIZE), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    margin = 8
    draw.rounded_rectangle(
        [margin, margin, ICON_SIZE - margin, ICON_SIZE - margin],
        radius=10,
        fill=color,
    )
    # three "lines" of text
    for i in range(3):
        top = margin + 12 + i * 12
        draw.rectangle([margin + 10, top, ICON_SIZE - margin - 10, top + 4], fill="#ffffff")
    return img


def tray_title(word_count: int) -> str:
    return f"Wordlist ({word_count} palabras)"


class TrayIcon:
    def __init__(self, on_open, on_quit):
        self._on_open = on_open
        self._on_quit = on_quit
        self._word_count = 0
        self._icon: pystray.Icon | None = None

    def _build_menu(self):
        return pystray.Menu(
            pystray.MenuItem("Abrir lista", self._open, default=True),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Salir", self._quit),
        )

    def _open(self):
        try:
            self._on_open()
        except Exception as e:
            logger.error("Error abriendo la lista: %s", e)

    def _quit(self):
        try:
            self._on_quit()
        except Exception as e:
            logger.error("Error al salir: %s", e)
        if self._icon:
            self._icon.stop()

    def update_state(self, word_count: int):
        self._word_count = word_count
        if self._icon:
            self._icon.title = tray_title(word_count)

    def run(self):
        self._icon = pystray.Icon(
            "Wordlist",
            icon=_create_icon_image(),
            title=tray_title(self._word_count),
            menu=self._build_menu(),
        )
        self._icon.run()
