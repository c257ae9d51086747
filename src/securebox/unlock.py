from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .algebra import (
    box_to_vector,
    build_influence_matrix,
    gf2_gauss,
    index_to_coord,
)
from .box import SecureBox


def plan_unlock(box: SecureBox) -> Optional[List[Tuple[int, int]]]:
    """Compute the toggles that unlock the box, or None if there are none.

    The returned coordinates are in ascending column-major order; since
    toggles commute, any order works.
    """
    state_vector = box_to_vector(box.get_state())
    influence_matrix = build_influence_matrix(box.y_size, box.x_size)

    is_valid, unlock_sequence = gf2_gauss(influence_matrix, state_vector)
    if not is_valid:
        return None
    return [
        index_to_coord(int(i), box.y_size)
        for i in np.flatnonzero(unlock_sequence)
    ]


def apply_plan(box: SecureBox, plan: List[Tuple[int, int]]) -> None:
    for row, col in plan:
        box.toggle(row, col)


def open_box(
    y_size: int,
    x_size: int,
    rng: np.random.Generator | None = None,
    state: np.ndarray | None = None,
) -> bool:
    """Create a box, unlock it and return True if it is still locked."""
    box = SecureBox(y_size, x_size, rng=rng, state=state)

    plan = plan_unlock(box)
    # all or nothing: an unsolvable box is left untouched
    if plan is not None:
        apply_plan(box, plan)

    return box.is_locked()
