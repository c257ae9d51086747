from __future__ import annotations


def opened(locked: bool) -> int:
    return int(not locked)


def toggles_used(plan) -> int:
    # an unsolvable box gets no plan and no toggles
    return 0 if plan is None else len(plan)


def broken(solvable: bool, locked: bool) -> int:
    """1 if the solver claimed a solution but the box stayed locked."""
    return int(bool(solvable) and bool(locked))
