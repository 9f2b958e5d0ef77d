import logging

from db.database import Database
from db.flow import QueryFlow
from db.models import SEED_WORDS, WORD_TABLE, Word

logger = logging.getLogger(__name__)


class WordDao:
    def __init__(self, db: Database):
        self.db = db

    def _load_words(self) -> list[Word]:
        rows = self.db.fetchall(f"SELECT word FROM {WORD_TABLE} ORDER BY word ASC")
        return [Word(row["word"]) for row in rows]

    def get_alphabetized_words(self) -> QueryFlow[list[Word]]:
        return QueryFlow(self.db, (WORD_TABLE,), self._load_words)

    def insert(self, word: Word) -> bool:
        cursor = self.db.execute(
            f"INSERT OR IGNORE INTO {WORD_TABLE} (word) VALUES (?)",
            (word.word,),
            invalidates=(WORD_TABLE,),
        )
        return cursor.rowcount > 0

    def delete_all(self) -> int:
        cursor = self.db.execute(f"DELETE FROM {WORD_TABLE}", invalidates=(WORD_TABLE,))
        return cursor.rowcount


def populate_database(db: Database, words: tuple[str, ...] = SEED_WORDS):
    """First-creation callback for ``Database``: insert the starter words."""
    dao = WordDao(db)
    for text in words:
        dao.insert(Word(text))
    logger.info("Base de datos inicializada con %d palabras", len(words))
