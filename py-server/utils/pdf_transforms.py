"""PDF transformation utilities for graphics operations."""

from typing import List, Sequence, Tuple

import numpy as np

MATRIX_EPSILON = 1e-9

# --- Core Transformation Functions ---
def apply_matrix_transform(x: float, y: float, ctm: Sequence[float]) -> Tuple[float, float]:
    """Apply CTM transformation to a point.

    Args:
        x, y: Point coordinates
        ctm: 6-element CTM matrix [a, b, c, d, e, f]

    Returns:
        Transformed (x, y) coordinates
    """
    a, b, c, d, e, f = ctm
    tx = a * x + c * y + e
    ty = b * x + d * y + f
    return tx, ty

def ctm_to_numpy(ctm: Sequence[float]) -> np.ndarray:
    """Convert [a, b, c, d, e, f] to a 3x3 column-vector matrix."""
    a, b, c, d, e, f = (float(v) for v in ctm)
    return np.array([
        [a, c, e],
        [b, d, f],
        [0.0, 0.0, 1.0],
    ], dtype=float)

def numpy_to_ctm(matrix: np.ndarray) -> List[float]:
    """Convert a 3x3 column-vector matrix back to [a, b, c, d, e, f]."""
    return [
        float(matrix[0, 0]), float(matrix[1, 0]),
        float(matrix[0, 1]), float(matrix[1, 1]),
        float(matrix[0, 2]), float(matrix[1, 2]),
    ]


class AffineTransform:
    """
    Immutable 2-D affine transform.

    Composition follows the drawing-canvas convention: ``t.concatenate(u)``
    yields a transform that applies ``u`` first and then ``t``, while
    ``t.pre_concatenate(u)`` applies ``t`` first and then ``u``.
    """

    __slots__ = ('_matrix',)

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0,
                 d: float = 1.0, e: float = 0.0, f: float = 0.0):
        self._matrix = ctm_to_numpy((a, b, c, d, e, f))

    @classmethod
    def identity(cls) -> 'AffineTransform':
        return cls()

    @classmethod
    def from_ctm(cls, ctm: Sequence[float]) -> 'AffineTransform':
        if len(ctm) != 6:
            raise ValueError(f"CTM must have 6 elements, got {len(ctm)}")
        return cls(*ctm)

    @classmethod
    def translation(cls, tx: float, ty: float) -> 'AffineTransform':
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> 'AffineTransform':
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def _from_numpy(cls, matrix: np.ndarray) -> 'AffineTransform':
        transform = cls.__new__(cls)
        transform._matrix = matrix
        return transform

    def concatenate(self, other: 'AffineTransform') -> 'AffineTransform':
        return self._from_numpy(self._matrix @ other._matrix)

    def pre_concatenate(self, other: 'AffineTransform') -> 'AffineTransform':
        return self._from_numpy(other._matrix @ self._matrix)

    def translate(self, tx: float, ty: float) -> 'AffineTransform':
        return self.concatenate(AffineTransform.translation(tx, ty))

    def scale(self, sx: float, sy: float) -> 'AffineTransform':
        return self.concatenate(AffineTransform.scaling(sx, sy))

    def transform_point(self, x: float, y: float) -> Tuple[float, float]:
        return apply_matrix_transform(x, y, self.to_ctm())

    @property
    def scale_x(self) -> float:
        """The ``a`` matrix element (horizontal scale factor)."""
        return float(self._matrix[0, 0])

    @property
    def is_identity(self) -> bool:
        return bool(np.allclose(self._matrix, np.identity(3), atol=MATRIX_EPSILON))

    def to_ctm(self) -> List[float]:
        return numpy_to_ctm(self._matrix)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return bool(np.allclose(self._matrix, other._matrix, atol=MATRIX_EPSILON))

    def __hash__(self):
        return hash(tuple(round(v, 9) for v in self.to_ctm()))

    def __repr__(self) -> str:
        a, b, c, d, e, f = self.to_ctm()
        return f"AffineTransform([{a:g}, {b:g}, {c:g}, {d:g}, {e:g}, {f:g}])"


def as_affine_transform(value) -> AffineTransform:
    """Accept an AffineTransform or a 6-element [a, b, c, d, e, f] sequence."""
    if isinstance(value, AffineTransform):
        return value
    return AffineTransform.from_ctm([float(v) for v in value])
