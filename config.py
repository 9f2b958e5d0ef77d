import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Rutas
BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.getenv("WORDLIST_DATA_DIR", BASE_DIR / "data"))
DB_NAME = "word_database"
DB_PATH = Path(os.getenv("WORDLIST_DB_PATH", DATA_DIR / f"{DB_NAME}.db"))
STATIC_DIR = BASE_DIR / "static"

# Servidor
HOST = "127.0.0.1"
PORT = 8790
PORT_MAX = 8800
OPEN_BROWSER = os.getenv("WORDLIST_OPEN_BROWSER", "1") == "1"
SSE_HEARTBEAT_SECS = 10.0

# Vacia la lista al arrancar (la base no se vuelve a sembrar)
RESET_ON_START = os.getenv("WORDLIST_RESET_ON_START", "0") == "1"
