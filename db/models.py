from dataclasses import dataclass

SCHEMA_VERSION = 1

WORD_TABLE = "word_table"

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {WORD_TABLE} (
    word TEXT PRIMARY KEY NOT NULL
);
"""

SEED_WORDS = ("Hello", "World!")


@dataclass(frozen=True)
class Word:
    word: str
