"""
Embedding Store - int8 word vector matrix in the DAT-RU binary format

Format: [num_words (uint32 LE)] [dimension (uint32 LE)] [num_words * dimension int8]
Rows are in lexicon order. No trailing bytes are allowed.
"""

import logging
import struct
from pathlib import Path
from typing import Union

import numpy as np

from .errors import DimensionMismatch, IndexOutOfRange, SizeMismatch

logger = logging.getLogger(__name__)

DIM = 300
HEADER_FORMAT = '<II'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


class EmbeddingStore:
    """Read-only N x D int8 matrix; rows are handed out as views, never copies."""

    def __init__(self, matrix: np.ndarray):
        if matrix.ndim != 2 or matrix.dtype != np.int8:
            raise ValueError(f"Expected a 2-D int8 matrix, got {matrix.ndim}-D {matrix.dtype}")
        # A writable array may still be mutated by whoever passed it in
        if matrix.flags.writeable:
            matrix = matrix.copy()
            matrix.flags.writeable = False
        self._matrix = matrix

    @classmethod
    def load(cls, data: Union[bytes, bytearray, memoryview], expected_dim: int = DIM) -> 'EmbeddingStore':
        """Parse a matrix buffer, validating the header against the payload."""
        if not isinstance(data, bytes):
            data = bytes(data)

        if len(data) < HEADER_SIZE:
            raise SizeMismatch(HEADER_SIZE, len(data), what="header bytes")

        num_words, dimension = struct.unpack_from(HEADER_FORMAT, data, 0)

        if dimension != expected_dim:
            raise DimensionMismatch(expected_dim, dimension)

        payload_size = len(data) - HEADER_SIZE
        expected_size = num_words * dimension
        if payload_size != expected_size:
            raise SizeMismatch(expected_size, payload_size)

        if expected_size == 0:
            return cls(np.zeros((num_words, dimension), dtype=np.int8))

        flat = np.frombuffer(data, dtype=np.int8, count=expected_size, offset=HEADER_SIZE)
        return cls(flat.reshape(num_words, dimension))

    @classmethod
    def from_file(cls, path, expected_dim: int = DIM) -> 'EmbeddingStore':
        path = Path(path)
        logger.info(f"Loading embedding matrix from {path}")
        try:
            # bytes keeps the buffer immutable for np.frombuffer
            data = path.read_bytes()
            store = cls.load(data, expected_dim=expected_dim)
        except Exception as e:
            logger.error(f"Failed to load embedding matrix {path}: {e}")
            raise

        logger.info(f"Embedding matrix: {store.num_words} vectors, dimension {store.dimension} "
                    f"(~{store.nbytes / 1024 / 1024:.1f}MB)")
        return store

    @property
    def num_words(self) -> int:
        return self._matrix.shape[0]

    @property
    def dimension(self) -> int:
        return self._matrix.shape[1]

    @property
    def nbytes(self) -> int:
        return self._matrix.nbytes

    def __len__(self) -> int:
        return self.num_words

    def vector(self, row_index: int) -> np.ndarray:
        """Read-only view of one row."""
        if row_index < 0 or row_index >= self.num_words:
            raise IndexOutOfRange(row_index, self.num_words)
        return self._matrix[row_index]

    def vectors(self, row_indices) -> np.ndarray:
        """Stack several rows. This copies; use vector() for single rows."""
        for row_index in row_indices:
            if row_index < 0 or row_index >= self.num_words:
                raise IndexOutOfRange(row_index, self.num_words)
        return self._matrix[list(row_indices)]


def pack_matrix(matrix: np.ndarray) -> bytes:
    """Serialise an N x D int8 matrix into the binary format."""
    matrix = np.ascontiguousarray(matrix, dtype=np.int8)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {matrix.shape}")
    num_words, dimension = matrix.shape
    return struct.pack(HEADER_FORMAT, num_words, dimension) + matrix.tobytes()


def write_matrix(path, matrix: np.ndarray) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(pack_matrix(matrix))
    return path
