from __future__ import annotations

import argparse

import numpy as np

from .unlock import open_box


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        prog="securebox",
        description="Scramble a SecureBox of the given size and unlock it.",
    )
    ap.add_argument("y", type=int, help="Number of rows")
    ap.add_argument("x", type=int, help="Number of columns")
    ap.add_argument(
        "--seed", type=int, default=None, help="Seed for the initial shuffle"
    )
    args = ap.parse_args(argv)

    if args.y <= 0 or args.x <= 0:
        ap.error("box dimensions must be positive integers")

    locked = open_box(args.y, args.x, rng=np.random.default_rng(args.seed))

    if locked:
        print("BOX: LOCKED!")
    else:
        print("BOX: OPENED!")
    return int(locked)
