from __future__ import annotations

import itertools

import numpy as np
import pytest

from securebox.box import SecureBox


def _empty(y_size: int, x_size: int) -> SecureBox:
    return SecureBox(y_size, x_size, state=np.zeros((y_size, x_size), dtype=bool))


def test_toggle_flips_row_and_column() -> None:
    box = _empty(3, 4)
    box.toggle(1, 2)
    expected = np.array(
        [
            [0, 0, 1, 0],
            [1, 1, 1, 1],
            [0, 0, 1, 0],
        ],
        dtype=bool,
    )
    np.testing.assert_array_equal(box.get_state(), expected)
    assert box.count_locked() == 6


def test_toggle_1x1() -> None:
    box = _empty(1, 1)
    box.toggle(0, 0)
    assert box.is_locked()
    box.toggle(0, 0)
    assert not box.is_locked()


def test_toggle_twice_restores_state() -> None:
    box = SecureBox(4, 5, rng=np.random.default_rng(3))
    before = box.get_state()
    for r, c in itertools.product(range(4), range(5)):
        box.toggle(r, c)
        box.toggle(r, c)
        np.testing.assert_array_equal(box.get_state(), before)


def test_toggles_commute() -> None:
    rng = np.random.default_rng(11)
    moves = [(int(rng.integers(3)), int(rng.integers(6))) for _ in range(12)]
    a = _empty(3, 6)
    b = _empty(3, 6)
    for r, c in moves:
        a.toggle(r, c)
    for idx in rng.permutation(len(moves)):
        b.toggle(*moves[idx])
    np.testing.assert_array_equal(a.get_state(), b.get_state())


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (3, 0), (0, 4)])
def test_toggle_out_of_range(cell) -> None:
    box = _empty(3, 4)
    with pytest.raises(IndexError):
        box.toggle(*cell)
    assert not box.is_locked()


def test_get_state_is_a_copy() -> None:
    box = _empty(2, 2)
    snapshot = box.get_state()
    snapshot[0, 0] = True
    assert not box.is_locked()


def test_initial_state_is_copied() -> None:
    state = np.zeros((2, 3), dtype=bool)
    box = SecureBox(2, 3, state=state)
    box.toggle(0, 0)
    assert not state.any()


def test_shuffle_reproducible_with_seed() -> None:
    a = SecureBox(5, 5, rng=np.random.default_rng(42))
    b = SecureBox(5, 5, rng=np.random.default_rng(42))
    np.testing.assert_array_equal(a.get_state(), b.get_state())


def test_copy_is_independent() -> None:
    box = SecureBox(3, 3, rng=np.random.default_rng(0))
    twin = box.copy()
    twin.toggle(0, 0)
    assert not np.array_equal(box.get_state(), twin.get_state())


def test_str() -> None:
    box = _empty(2, 3)
    box.toggle(0, 0)
    assert str(box) == "111\n100"
    assert repr(box) == "SecureBox(y_size=2, x_size=3, locked=4)"


def test_initial_state_wrong_shape() -> None:
    with pytest.raises(
        ValueError, match=r"Expected state of shape \(2, 3\), got \(3, 2\)"
    ):
        SecureBox(2, 3, state=np.zeros((3, 2), dtype=bool))
