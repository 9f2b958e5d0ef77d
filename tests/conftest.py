import time

import pytest

from db.database import Database
from db.word_dao import WordDao, populate_database
from repository.word_repository import WordRepository


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "word_database.db"


@pytest.fixture()
def db(db_path):
    database = Database(db_path, on_create=populate_database)
    yield database
    database.close()


@pytest.fixture()
def empty_db(db_path):
    database = Database(db_path)
    yield database
    database.close()


@pytest.fixture()
def dao(db):
    return WordDao(db)


@pytest.fixture()
def repository(dao):
    return WordRepository(dao)


def wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()
