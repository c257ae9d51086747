from __future__ import annotations

import time
from pathlib import Path

import numpy as np
import yaml

from ..algebra import (
    box_to_vector,
    build_influence_matrix,
    gf2_gauss,
    index_to_coord,
    is_solution,
)
from ..box import SecureBox
from ..unlock import apply_plan
from .metrics import broken, opened, toggles_used

FIELDNAMES = [
    "y_size",
    "x_size",
    "seed",
    "board_id",
    "initial_locked",
    "solvable",
    "verified",
    "toggles_used",
    "opened",
    "broken",
    "time_ms",
]


def load_config(path) -> dict:
    """Read and validate the `experiment` section of a sweep YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if "experiment" not in raw:
        raise ValueError(f"{path}: missing 'experiment' section")
    cfg = raw["experiment"]

    sizes = []
    for item in cfg.get("sizes") or []:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Invalid size spec: {item}")
        y_size, x_size = int(item[0]), int(item[1])
        if y_size <= 0 or x_size <= 0:
            raise ValueError(f"Box dimensions must be positive: {item}")
        sizes.append((y_size, x_size))
    if not sizes:
        raise ValueError(f"{path}: 'sizes' must list at least one [y, x]")

    init = cfg.get("initial_states") or {}
    n_samples = int(init.get("n_samples", 100))
    if n_samples <= 0:
        raise ValueError(f"{path}: n_samples must be positive, got {n_samples}")
    return {
        "sizes": sizes,
        "n_samples": n_samples,
        "seed": int(init.get("seed", 0)),
        "output_dir": Path(cfg.get("output_dir", "results/runs")),
    }


def task_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each task."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def make_batches(sizes, n_samples: int, batch_size: int, base_seed: int):
    """Create job batches: one job per size and range of sample ids."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    ranges = [
        (i, min(i + batch_size, n_samples))
        for i in range(0, n_samples, batch_size)
    ]
    for y_size, x_size in sizes:
        for lo, hi in ranges:
            yield {
                "y_size": int(y_size),
                "x_size": int(x_size),
                "idx_lo": lo,
                "idx_hi": hi,
                "base_seed": base_seed,
            }


def count_batches(sizes, n_samples: int, batch_size: int) -> int:
    return len(sizes) * ((n_samples + batch_size - 1) // batch_size)


def run_batch(job) -> list[dict]:
    """Scramble and unlock one box per sample id in the job's range."""
    y_size = job["y_size"]
    x_size = job["x_size"]
    base_seed = job["base_seed"]

    A = build_influence_matrix(y_size, x_size)
    rows = []
    for board_id in range(job["idx_lo"], job["idx_hi"]):
        rng = np.random.default_rng(
            task_seed(base_seed, y_size, x_size, board_id)
        )
        box = SecureBox(y_size, x_size, rng=rng)
        initial_locked = box.count_locked()

        start_time = time.perf_counter()
        b = box_to_vector(box.get_state())
        solvable, x = gf2_gauss(A, b)
        plan = None
        if solvable:
            plan = [index_to_coord(int(i), y_size) for i in np.flatnonzero(x)]
            apply_plan(box, plan)
        time_ms = (time.perf_counter() - start_time) * 1000

        locked = box.is_locked()
        rows.append(
            {
                "y_size": y_size,
                "x_size": x_size,
                "seed": base_seed,
                "board_id": board_id,
                "initial_locked": initial_locked,
                "solvable": int(solvable),
                "verified": int(solvable and is_solution(A, x, b)),
                "toggles_used": toggles_used(plan),
                "opened": opened(locked),
                "broken": broken(solvable, locked),
                "time_ms": time_ms,
            }
        )
    return rows
