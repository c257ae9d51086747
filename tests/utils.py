from __future__ import annotations

import itertools

import numpy as np

from securebox.box import SecureBox


def iter_reachable_states(y_size: int, x_size: int):
    """Iterate over the states reached by every subset of toggles."""
    coords = [(r, c) for c in range(x_size) for r in range(y_size)]
    for mask in itertools.product((False, True), repeat=len(coords)):
        box = SecureBox(
            y_size, x_size, state=np.zeros((y_size, x_size), dtype=bool)
        )
        for (r, c), on in zip(coords, mask):
            if on:
                box.toggle(r, c)
        yield box.get_state()
