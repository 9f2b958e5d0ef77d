from db.flow import QueryFlow
from db.models import Word
from db.word_dao import WordDao


class WordRepository:
    """Keeps the view-models away from the storage layer."""

    def __init__(self, word_dao: WordDao):
        self._word_dao = word_dao
        self.all_words: QueryFlow[list[Word]] = word_dao.get_alphabetized_words()

    def insert(self, word: Word):
        # Blocking SQLite write, call it from a worker thread
        self._word_dao.insert(word)
