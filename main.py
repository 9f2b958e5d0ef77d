import logging
import socket
import sys
import threading
import webbrowser

import uvicorn

import config
from db.database import Database
from db.word_dao import WordDao, populate_database
from repository.word_repository import WordRepository
from server.app import create_app
from tray.tray_icon import TrayIcon
from viewmodel.base import ViewModelStore
from viewmodel.hello_viewmodel import HelloViewModel
from viewmodel.word_viewmodel import WordViewModel, WordViewModelFactory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("wordlist")


def find_available_port(start: int, end: int) -> int:
    for port in range(start, end + 1):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((config.HOST, port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No se encontro un puerto disponible entre {start} y {end}")


def main():
    try:
        port = find_available_port(config.PORT, config.PORT_MAX)
    except RuntimeError as e:
        logger.error(str(e))
        sys.exit(1)

    if port != config.PORT:
        logger.info("Puerto %d en uso, usando %d", config.PORT, port)
    config.PORT = port

    # Initialize components once, in dependency order
    db = Database(config.DB_PATH, on_create=populate_database)
    word_dao = WordDao(db)
    if config.RESET_ON_START:
        removed = word_dao.delete_all()
        logger.info("Lista vaciada al arrancar (%d palabras eliminadas)", removed)
    repository = WordRepository(word_dao)

    view_models = ViewModelStore()
    word_view_model = view_models.get(WordViewModel, WordViewModelFactory(repository))
    hello_view_model = view_models.get(HelloViewModel)

    app = create_app(word_view_model, hello_view_model)

    url = f"http://{config.HOST}:{config.PORT}"
    server_should_stop = threading.Event()

    def open_list():
        webbrowser.open(url)

    def quit_app():
        if server_should_stop.is_set():
            return
        logger.info("Cerrando Wordlist...")
        server_should_stop.set()
        server.should_exit = True

    tray = TrayIcon(on_open=open_list, on_quit=quit_app)

    def update_tray(words):
        try:
            tray.update_state(len(words))
        except Exception as e:
            logger.warning("No se pudo actualizar el icono: %s", e)

    word_view_model.all_words.observe(update_tray)

    # Start server in background thread
    server_config = uvicorn.Config(
        app,
        host=config.HOST,
        port=config.PORT,
        log_level="warning",
    )
    server = uvicorn.Server(server_config)

    server_thread = threading.Thread(target=server.run, daemon=True)
    server_thread.start()

    logger.info("Wordlist iniciado en %s", url)
    if config.OPEN_BROWSER:
        open_list()

    # Run tray icon on main thread (blocks until quit)
    try:
        tray.run()
    except KeyboardInterrupt:
        pass
    finally:
        quit_app()
        server_thread.join(timeout=5)
        word_view_model.all_words.remove_observer(update_tray)
        view_models.clear()
        db.close()


if __name__ == "__main__":
    main()
