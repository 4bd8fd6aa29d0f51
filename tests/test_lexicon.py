# tests/test_lexicon.py
"""Tests for lemma lookup and normalization."""

import json

import pytest

from dat_ru import Lexicon, MalformedDictionary, fold_word


def test_row_indices_follow_list_order(lexicon):
    assert lexicon.index_of("кот") == 0
    assert lexicon.index_of("ель") == len(lexicon) - 1
    assert lexicon.index_of("нет") is None
    assert len(lexicon) == 50


def test_membership(lexicon):
    assert "кот" in lexicon
    assert "коты" not in lexicon


def test_normalize_lemma(lexicon):
    assert lexicon.normalize("кот") == "кот"


def test_normalize_form(lexicon):
    assert lexicon.normalize("коты") == "кот"
    assert lexicon.normalize("ПСА") == "пес"


def test_normalize_folds_yo_and_case(lexicon):
    assert lexicon.normalize("ЁЖИК") == lexicon.normalize("ежик") == "ежик"
    assert lexicon.normalize("ёлка") == "елка"
    assert lexicon.normalize("самолёт") == "самолет"
    assert lexicon.normalize("ёжики") == "ежик"


def test_normalize_trims(lexicon):
    assert lexicon.normalize("  Кот \n") == "кот"


def test_normalize_does_no_other_cleanup(lexicon):
    assert lexicon.normalize("кот!") is None
    assert lexicon.normalize("котик") is None
    assert lexicon.normalize("") is None


def test_fold_word():
    assert fold_word(" ЁЛКА ") == "елка"


def test_duplicate_lemma_rejected():
    with pytest.raises(MalformedDictionary) as excinfo:
        Lexicon.load(["кот", "пес", "кот"], {})
    assert excinfo.value.word == "кот"


def test_form_to_unknown_lemma_rejected():
    with pytest.raises(MalformedDictionary) as excinfo:
        Lexicon.load(["кот"], {"псы": "пес"})
    assert excinfo.value.word == "пес"


def test_form_equal_to_lemma_allowed():
    lexicon = Lexicon.load(["кот"], {"кот": "кот"})
    assert lexicon.normalize("кот") == "кот"


def test_from_files(data_dir):
    lexicon = Lexicon.from_files(data_dir / "words.json", data_dir / "forms.json")
    assert len(lexicon) == 50
    assert lexicon.form_count == 8
    assert lexicon.normalize("реки") == "река"


def test_from_files_without_forms(data_dir):
    lexicon = Lexicon.from_files(data_dir / "words.json")
    assert lexicon.normalize("реки") is None
    assert lexicon.normalize("река") == "река"


def test_from_files_rejects_non_list(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps({"кот": 0}), encoding="utf-8")
    with pytest.raises(MalformedDictionary):
        Lexicon.from_files(path)
