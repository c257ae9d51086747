from __future__ import annotations

import numpy as np

SHUFFLE_MAX_TOGGLES = 1000


class SecureBox:
    """A y_size x x_size grid of locks (True = locked).

    Toggling a cell flips its whole row and its whole column. A fresh box is
    scrambled by a random number of toggles, so its state is always reachable
    from the all-unlocked box.
    """

    def __init__(
        self,
        y_size: int,
        x_size: int,
        rng: np.random.Generator | None = None,
        state: np.ndarray | None = None,
    ):
        self.y_size = int(y_size)
        self.x_size = int(x_size)
        self.rng = rng or np.random.default_rng()
        if state is None:
            self.box = np.zeros((self.y_size, self.x_size), dtype=bool)
            self.shuffle()
        else:
            state = np.asarray(state)
            if state.shape != (self.y_size, self.x_size):
                raise ValueError(
                    f"Expected state of shape {(self.y_size, self.x_size)}, "
                    f"got {state.shape}"
                )
            self.box = state.astype(bool, copy=True)

    def shuffle(self) -> None:
        """Randomly toggle cells to create an initial locked state."""
        for _ in range(int(self.rng.integers(0, SHUFFLE_MAX_TOGGLES))):
            self.toggle(
                int(self.rng.integers(self.y_size)),
                int(self.rng.integers(self.x_size)),
            )

    def toggle(self, row: int, col: int) -> None:
        if not (0 <= row < self.y_size and 0 <= col < self.x_size):
            raise IndexError(
                f"Cell ({row}, {col}) outside box of shape "
                f"{(self.y_size, self.x_size)}"
            )
        # (row, col) is hit three times, so it flips once like the rest
        self.box[row, col] ^= True
        self.box[row, :] ^= True
        self.box[:, col] ^= True

    def is_locked(self) -> bool:
        return bool(self.box.any())

    def get_state(self) -> np.ndarray:
        return self.box.copy()

    def copy(self) -> "SecureBox":
        return SecureBox(self.y_size, self.x_size, self.rng, self.box)

    def count_locked(self) -> int:
        return int(self.box.sum())

    def __repr__(self):
        return (
            f"SecureBox(y_size={self.y_size}, x_size={self.x_size}, "
            f"locked={self.count_locked()})"
        )

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.box
        )
