from __future__ import annotations

from typing import Tuple

import numpy as np


def coord_to_index(row: int, col: int, y_size: int) -> int:
    """Column-major flat index of cell (row, col)."""
    return col * y_size + row


def index_to_coord(i: int, y_size: int) -> Tuple[int, int]:
    return i % y_size, i // y_size


def element_influence(row: int, col: int, y_size: int, x_size: int) -> np.ndarray:
    """Return the cells flipped by toggling (row, col), flattened column-major.

    For a 3x3 box and cell (1, 1) the influence in matrix form is

        |0 1 0|
        |1 1 1|
        |0 1 0|

    and the returned vector is [0, 1, 0, 1, 1, 1, 0, 1, 0].
    """
    result = np.zeros(y_size * x_size, dtype=np.uint8)
    for i in range(x_size):
        result[coord_to_index(row, i, y_size)] = 1
    for j in range(y_size):
        result[coord_to_index(j, col, y_size)] = 1
    return result


def build_influence_matrix(y_size: int, x_size: int) -> np.ndarray:
    """Return the N x N influence matrix over GF(2), N = y_size * x_size.

    Row i is the influence vector of toggle i, with toggles enumerated in the
    same column-major order as cells. The matrix is symmetric.
    """
    rows = []
    for col in range(x_size):
        for row in range(y_size):
            rows.append(element_influence(row, col, y_size, x_size))
    return np.array(rows, dtype=np.uint8)


def box_to_vector(state: np.ndarray) -> np.ndarray:
    """Flatten a (y_size, x_size) box state column-major into a 0/1 vector."""
    return np.asarray(state, dtype=bool).reshape(-1, order="F").astype(np.uint8)


def gf2_matvec(A: np.ndarray, x: np.ndarray) -> np.ndarray:
    A = (np.asarray(A) % 2).astype(np.int64)
    x = (np.asarray(x) % 2).astype(np.int64)
    return ((A @ x) % 2).astype(np.uint8)


def is_solution(A: np.ndarray, x: np.ndarray, b: np.ndarray) -> bool:
    """Check A x = b over GF(2)."""
    b = (np.asarray(b) % 2).astype(np.uint8).reshape(-1)
    return bool(np.array_equal(gf2_matvec(A, x), b))


def gf2_gauss(A: np.ndarray, b: np.ndarray) -> Tuple[bool, np.ndarray]:
    """Solve A x = b over GF(2) with Gauss-Jordan elimination.

    Works on copies of A and b. Free variables are set to 0, so when the
    system is under-determined this returns one solution among several.

    Returns:
        solvable: False if the reduced system contains a 0 = 1 row
        x: solution of length A.shape[1] (all zeros when not solvable)
    """
    A = np.asarray(A)
    b = np.asarray(b).reshape(-1)
    if A.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {A.shape}")
    n, m = A.shape
    if b.shape[0] != n:
        raise ValueError(f"Expected rhs of length {n}, got {b.shape[0]}")

    M = (A % 2).astype(np.uint8)
    r = (b % 2).astype(np.uint8)
    x = np.zeros((m,), dtype=np.uint8)

    row = 0
    for col in range(m):
        if row >= n:
            break
        # find a pivot in/under current row
        pivot = None
        for i in range(row, n):
            if M[i, col]:
                pivot = i
                break
        if pivot is None:
            continue
        # matrix row and rhs entry move together
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
            r[[row, pivot]] = r[[pivot, row]]
        # eliminate above and below; the pivot row is zero left of col
        for i in range(n):
            if i != row and M[i, col]:
                M[i, col:] ^= M[row, col:]
                r[i] ^= r[row]
        row += 1

    # 0 = 1 rows
    if np.any(r[row:]):
        return False, x

    for i in range(row):
        pivot_col = int(np.flatnonzero(M[i])[0])
        x[pivot_col] = r[i]
    return True, x
