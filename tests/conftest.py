"""Shared fixtures: a 50-word toy lexicon with deterministic int8 vectors."""

import json

import numpy as np
import pytest

from dat_ru import DIM, EmbeddingStore, Engine, Lexicon, pack_matrix

GOLDEN_WORDS = ["кот", "кошка", "вулкан", "лава", "ложка", "облако", "вилка"]
SAME_WORDS = ["дом", "здание", "изба", "хата", "терем", "дворец", "замок"]
ZERO_WORD = "пустота"

TOY_WORDS = GOLDEN_WORDS + SAME_WORDS + [ZERO_WORD] + [
    "ежик", "пес", "река", "море", "озеро", "гора", "лес", "поле", "небо",
    "звезда", "луна", "солнце", "ветер", "дождь", "снег", "огонь", "вода",
    "земля", "камень", "песок", "книга", "стол", "стул", "окно", "дверь",
    "машина", "поезд", "самолет", "корабль", "город", "страна", "музыка",
    "елка", "чай", "ель",
]

TOY_FORMS = {
    "коты": "кот",
    "кота": "кот",
    "кошки": "кошка",
    "псы": "пес",
    "пса": "пес",
    "дома": "дом",
    "ежики": "ежик",
    "реки": "река",
}


def _golden_rows():
    """
    Seven rows with hand-computable pairwise distances:
    d(0,1) = 1 - 24/25, d(2,3) = 1 - 15/25, d(4,6) = 2, every other pair 1.
    """
    rows = np.zeros((7, DIM), dtype=np.int8)
    rows[0, 0], rows[0, 1] = 3, 4
    rows[1, 0], rows[1, 1] = 4, 3
    rows[2, 2] = 5
    rows[3, 2], rows[3, 3] = 3, 4
    rows[4, 4] = 1
    rows[5, 5] = 2
    rows[6, 4] = -7
    return rows


def build_toy_matrix():
    assert len(TOY_WORDS) == 50
    rng = np.random.default_rng(20240101)
    matrix = rng.integers(-127, 128, size=(len(TOY_WORDS), DIM)).astype(np.int8)

    matrix[0:7] = _golden_rows()
    shared = rng.integers(-127, 128, size=DIM).astype(np.int8)
    matrix[7:14] = shared
    matrix[TOY_WORDS.index(ZERO_WORD)] = 0
    return matrix


@pytest.fixture
def golden_words():
    return list(GOLDEN_WORDS)


@pytest.fixture
def same_words():
    return list(SAME_WORDS)


@pytest.fixture
def zero_word():
    return ZERO_WORD


@pytest.fixture
def toy_matrix():
    return build_toy_matrix()


@pytest.fixture
def matrix_bytes(toy_matrix):
    return pack_matrix(toy_matrix)


@pytest.fixture
def lexicon():
    return Lexicon.load(TOY_WORDS, TOY_FORMS)


@pytest.fixture
def store(matrix_bytes):
    return EmbeddingStore.load(matrix_bytes)


@pytest.fixture
def engine(lexicon, store):
    return Engine(lexicon, store)


@pytest.fixture
def data_dir(tmp_path, matrix_bytes):
    """A data directory holding words.json, forms.json and matrix.bin."""
    directory = tmp_path / "data"
    directory.mkdir()
    with open(directory / "words.json", "w", encoding="utf-8") as f:
        json.dump(TOY_WORDS, f, ensure_ascii=False)
    with open(directory / "forms.json", "w", encoding="utf-8") as f:
        json.dump(TOY_FORMS, f, ensure_ascii=False)
    (directory / "matrix.bin").write_bytes(matrix_bytes)
    return directory
