"""
Lorentz boost between the lab frame and the head-on collision frame.

With a crossing angle the two beams do not collide head-on in the lab. The
boost is parametrised by the half crossing angle ``phi`` in the crossing plane
and the angle ``alpha`` of that plane to the x axis in the transverse plane.
Index 0 of the matrices is time; indices 1 to 3 are the spatial axes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)

DIM = 4


class BoostMatrix:
    """Immutable 4x4 real matrix backed by a read-only numpy array."""

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray | Sequence[Sequence[float]]):
        arr = np.array(data, dtype=np.float64)
        if arr.shape != (DIM, DIM):
            raise ValueError(f"A boost matrix must be {DIM}x{DIM}, got shape {arr.shape}")
        arr.setflags(write=False)
        self._data = arr

    @classmethod
    def identity(cls) -> BoostMatrix:
        return cls(np.eye(DIM))

    def __getitem__(self, index):
        item = self._data[index]
        return item.copy() if isinstance(item, np.ndarray) else float(item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoostMatrix):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BoostMatrix({self._data.tolist()})"

    def __matmul__(self, other: BoostMatrix) -> BoostMatrix:
        if not isinstance(other, BoostMatrix):
            return NotImplemented
        return BoostMatrix(self._data @ other._data)

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the matrix."""
        return self._data.copy()

    def apply(self, vector: Sequence[float] | np.ndarray) -> np.ndarray:
        """Transform a four-vector (or an (N, 4) array of them) ordered (t, x1, x2, x3)."""
        vec = np.asarray(vector, dtype=np.float64)
        if vec.shape[-1] != DIM:
            raise ValueError(f"Expected four-vectors with {DIM} components, got shape {vec.shape}")
        return vec @ self._data.T

    def allclose(self, other: BoostMatrix, rtol: float = 1e-12, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def inverse(self) -> BoostMatrix:
        """
        Invert with Gauss-Jordan elimination and partial pivoting.

        Raises:
            numpy.linalg.LinAlgError: If the matrix is singular.
        """
        aug = np.hstack([self._data, np.eye(DIM)])
        for col in range(DIM):
            pivot = col + int(np.argmax(np.abs(aug[col:, col])))
            if aug[pivot, col] == 0.0:
                raise np.linalg.LinAlgError("Boost matrix is singular")
            if pivot != col:
                aug[[col, pivot]] = aug[[pivot, col]]
            aug[col] /= aug[col, col]
            for row in range(DIM):
                if row != col and aug[row, col] != 0.0:
                    aug[row] -= aug[row, col] * aug[col]
        return BoostMatrix(aug[:, DIM:])


def head_on_boost(alpha: float, phi: float) -> BoostMatrix:
    """
    Boost from the lab frame to the frame where the collision is head-on.

    Args:
        alpha: Angle of the crossing plane to the x axis [rad]
        phi: Half crossing angle [rad]
    """
    ca, sa = np.cos(alpha), np.sin(alpha)
    sp, cp, tp = np.sin(phi), np.cos(phi), np.tan(phi)
    return BoostMatrix(
        [
            [1.0 / cp, -ca * sp, -tp * sp, -sa * sp],
            [-ca * tp, 1.0, ca * tp, 0.0],
            [0.0, -ca * sp, cp, -sa * sp],
            [-sa * tp, 0.0, sa * tp, 1.0],
        ]
    )


def build_boost(alpha: float, phi: float) -> BoostMatrix:
    """Inverse of :func:`head_on_boost`: from the head-on frame back to the lab frame."""
    LOGGER.debug("Building inverse Lorentz boost for alpha=%f, phi=%f", alpha, phi)
    return head_on_boost(alpha, phi).inverse()
