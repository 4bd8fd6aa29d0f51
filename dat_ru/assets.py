"""
Asset builder - float word vectors to words.json + matrix.bin

Keeps lowercase Cyrillic words only, folds ё to е (the lexicon folds user
input the same way), sorts the lemmas and quantizes each row to int8.
"""

import json
import logging
import re
from pathlib import Path
from typing import List, Tuple

import numpy as np

from .embedding_store import DIM, write_matrix

logger = logging.getLogger(__name__)

LEMMA_PATTERN = re.compile(r'^[а-яё]+(?:-[а-яё]+)*$')


def is_cyrillic_lemma(word) -> bool:
    """Lowercase Cyrillic word, optionally hyphenated."""
    if not word or not isinstance(word, str):
        return False
    return bool(LEMMA_PATTERN.match(word))


def filter_vocabulary(vocabulary: List[str], vectors: np.ndarray) -> Tuple[List[str], np.ndarray]:
    """
    Keep Cyrillic lemmas, folded and sorted.

    When folding makes two entries collide the earlier one wins; embedding
    vocabularies are frequency-ordered, so that is the more frequent spelling.
    """
    chosen = {}
    for i, word in enumerate(vocabulary):
        if not is_cyrillic_lemma(word):
            continue
        folded = word.replace('ё', 'е')
        if folded not in chosen:
            chosen[folded] = i

    words = sorted(chosen)
    indices = [chosen[w] for w in words]
    return words, vectors[indices]


def quantize_vectors(vectors: np.ndarray) -> np.ndarray:
    """Scale each row so its largest component is +/-127, round to int8. Zero rows stay zero."""
    vectors = np.asarray(vectors, dtype=np.float64)
    max_abs = np.abs(vectors).max(axis=1, keepdims=True)
    scale = np.divide(127.0, max_abs, out=np.zeros_like(max_abs), where=max_abs > 0)
    return np.clip(np.rint(vectors * scale), -127, 127).astype(np.int8)


def load_word2vec(model_path) -> Tuple[List[str], np.ndarray]:
    """Read a word2vec binary model with gensim (the `convert` extra)."""
    from gensim.models import KeyedVectors

    logger.info(f"Loading word2vec model: {model_path}")
    wv = KeyedVectors.load_word2vec_format(str(model_path), binary=True)
    return list(wv.index_to_key), wv.vectors


def load_numpy(vectors_path, vocab_path) -> Tuple[List[str], np.ndarray]:
    vectors = np.load(vectors_path)
    with open(vocab_path, 'r', encoding='utf-8') as f:
        vocabulary = json.load(f)
    return vocabulary, vectors


def build_assets(vocabulary: List[str], vectors: np.ndarray, output_dir,
                 dimension: int = DIM) -> Tuple[Path, Path, Path]:
    """Validate, filter, quantize and write words.json, matrix.bin and matrix_metadata.json."""
    if not isinstance(vocabulary, list) or len(vocabulary) == 0:
        raise ValueError("Vocabulary must be a non-empty list")
    if vectors is None or vectors.ndim != 2:
        raise ValueError(f"Expected 2D vectors array, got {None if vectors is None else vectors.shape}")
    if len(vocabulary) != vectors.shape[0]:
        raise ValueError(f"Vocabulary size ({len(vocabulary)}) doesn't match vectors ({vectors.shape[0]})")
    if vectors.shape[1] != dimension:
        raise ValueError(f"Expected dimension {dimension}, got {vectors.shape[1]}")
    if not np.isfinite(vectors).all():
        raise ValueError("Vectors contain non-finite values (NaN or inf)")

    words, kept = filter_vocabulary(vocabulary, vectors)
    if not words:
        raise ValueError("No Cyrillic words left after filtering")
    logger.info(f"Filtered to {len(words)} lemmas ({len(words) / len(vocabulary) * 100:.1f}%)")

    matrix = quantize_vectors(kept)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    words_path = output_dir / 'words.json'
    with open(words_path, 'w', encoding='utf-8') as f:
        json.dump(words, f, ensure_ascii=False)

    matrix_path = write_matrix(output_dir / 'matrix.bin', matrix)

    metadata = {
        'num_vectors': len(words),
        'dimension': int(matrix.shape[1]),
        'vector_dtype': 'int8',
        'quantization': 'row_max_abs_127',
        'format_version': '1.0',
    }
    metadata_path = output_dir / 'matrix_metadata.json'
    with open(metadata_path, 'w', encoding='utf-8') as f:
        json.dump(metadata, f, indent=2)

    return words_path, matrix_path, metadata_path
