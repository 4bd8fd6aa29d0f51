# tests/test_assets.py
"""Tests for building engine assets from float vectors."""

import json

import numpy as np
import pytest

from dat_ru import DIM, Engine
from dat_ru.assets import build_assets, filter_vocabulary, is_cyrillic_lemma, quantize_vectors


@pytest.mark.parametrize("word, expected", [
    ("кот", True),
    ("ёлка", True),
    ("кое-что", True),
    ("Кот", False),
    ("cat", False),
    ("-кот", False),
    ("кот1", False),
    ("", False),
    (None, False),
])
def test_is_cyrillic_lemma(word, expected):
    assert is_cyrillic_lemma(word) is expected


def test_filter_vocabulary_folds_sorts_and_dedupes():
    vocabulary = ["ёлка", "cat", "яблоко", "елка", "арбуз"]
    vectors = np.arange(5, dtype=np.float32).reshape(5, 1)

    words, kept = filter_vocabulary(vocabulary, vectors)

    assert words == ["арбуз", "елка", "яблоко"]
    # "ёлка" comes first, so its row wins over "елка"
    assert kept[:, 0].tolist() == [4.0, 0.0, 2.0]


def test_quantize_vectors():
    vectors = np.array([
        [0.5, -1.0, 0.25],
        [0.0, 0.0, 0.0],
        [2.0, 1.0, -2.0],
    ])
    q = quantize_vectors(vectors)
    assert q.dtype == np.int8
    assert q[0].tolist() == [64, -127, 32]
    assert q[1].tolist() == [0, 0, 0]
    assert q[2].tolist() == [127, 64, -127]


def test_build_assets_loads_into_engine(tmp_path):
    rng = np.random.default_rng(7)
    vocabulary = ["кот", "пёс", "dog", "река", "море", "гора", "лес", "поле", "небо"]
    vectors = rng.normal(size=(len(vocabulary), DIM)).astype(np.float32)

    words_path, matrix_path, metadata_path = build_assets(vocabulary, vectors, tmp_path / "data")

    with open(words_path, encoding="utf-8") as f:
        words = json.load(f)
    assert words == sorted(["кот", "пес", "река", "море", "гора", "лес", "поле", "небо"])

    with open(metadata_path, encoding="utf-8") as f:
        metadata = json.load(f)
    assert metadata["num_vectors"] == 8
    assert metadata["dimension"] == DIM

    engine = Engine.from_directory(tmp_path / "data")
    assert engine.normalize("Пёс") == "пес"
    result = engine.score(words[:7])
    assert 0 < result.raw_score < 200


def test_build_assets_rejects_bad_input(tmp_path):
    with pytest.raises(ValueError):
        build_assets([], np.zeros((0, DIM)), tmp_path)
    with pytest.raises(ValueError):
        build_assets(["кот"], np.zeros((2, DIM)), tmp_path)
    with pytest.raises(ValueError):
        build_assets(["кот"], np.zeros((1, 10)), tmp_path)
    with pytest.raises(ValueError):
        build_assets(["кот"], np.full((1, DIM), np.nan), tmp_path)
    with pytest.raises(ValueError):
        build_assets(["cat"], np.ones((1, DIM)), tmp_path)
