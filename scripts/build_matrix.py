#!/usr/bin/env python3
"""
Build the DAT-RU engine assets from float word vectors.

Usage:
    build_matrix.py <word_vectors.npy> <word_vocab.json> [output_dir]
    build_matrix.py <model.bin> [output_dir]        (word2vec binary, needs gensim)

Writes words.json, matrix.bin and matrix_metadata.json to output_dir
(default: ./data).
"""

import logging
import sys
from pathlib import Path

from dat_ru.assets import build_assets, load_numpy, load_word2vec

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        return 1

    source = Path(args[0])
    if source.suffix == '.npy':
        if len(args) < 2:
            print("Error: a .npy matrix needs a vocabulary JSON file")
            return 1
        vocab_path = Path(args[1])
        output_dir = Path(args[2]) if len(args) > 2 else Path('data')
        if not vocab_path.exists():
            print(f"Error: Vocabulary file not found: {vocab_path}")
            return 1
    else:
        vocab_path = None
        output_dir = Path(args[1]) if len(args) > 1 else Path('data')

    if not source.exists():
        print(f"Error: Vectors file not found: {source}")
        return 1

    print("=" * 60)
    print(f"Source: {source}")
    print(f"Output directory: {output_dir}")
    print("=" * 60)

    try:
        if vocab_path is not None:
            vocabulary, vectors = load_numpy(source, vocab_path)
        else:
            vocabulary, vectors = load_word2vec(source)

        logger.info(f"Loaded {len(vocabulary)} words with {vectors.shape[1]} dimensional vectors")
        words_file, matrix_file, metadata_file = build_assets(vocabulary, vectors, output_dir)
    except ImportError as e:
        print(f"❌ gensim is required for word2vec models (pip install dat-ru[convert]): {e}")
        return 1
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    print("✅ Engine assets created:")
    print(f"  Lemmas: {words_file}")
    print(f"  Matrix: {matrix_file}")
    print(f"  Metadata: {metadata_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
