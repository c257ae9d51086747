import argparse
import csv
import multiprocessing as mp
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"
mp.freeze_support()

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from securebox.evaluation.sweep import (  # noqa: E402
    FIELDNAMES,
    count_batches,
    load_config,
    make_batches,
    run_batch,
)


def _fmt_minutes(seconds: float) -> str:
    return f"{int(seconds // 60)}m {int(seconds % 60)}s"


def run_pool(jobs, writer, workers, total_jobs):
    """Unlock every batch in a worker pool, writing rows as batches finish."""
    ctx = mp.get_context("spawn")
    start_time = time.time()
    n_boxes = 0

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        futures = [ex.submit(run_batch, j) for j in jobs]
        for done, fut in enumerate(as_completed(futures), start=1):
            try:
                rows = fut.result()
            except Exception:
                import traceback

                print("\n[ERROR] Worker failed:")
                traceback.print_exc()
                raise
            writer.writerows(rows)
            n_boxes += len(rows)

            elapsed = time.time() - start_time
            eta = elapsed / done * (total_jobs - done)
            print(
                f"\r[progress] {done}/{total_jobs} batches | "
                f"{n_boxes:>7,} boxes | elapsed: {_fmt_minutes(elapsed)} | "
                f"ETA: {_fmt_minutes(eta)}",
                end="",
                flush=True,
            )
    print()


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "experiments" / "configs" / "sweep.yaml"),
    )
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument(
        "--workers", type=int, default=default_workers, help="Number of workers"
    )
    ap.add_argument(
        "--batch-size", type=int, default=100, help="Boxes per batch"
    )
    args = ap.parse_args()

    if args.workers < 1:
        ap.error("--workers must be at least 1")
    if args.batch_size < 1:
        ap.error("--batch-size must be at least 1")

    try:
        cfg = load_config(args.config)
    except ValueError as exc:
        ap.error(str(exc))
    out_dir = cfg["output_dir"]
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / "sweep.csv")

    sizes = cfg["sizes"]
    n_samples = cfg["n_samples"]
    total_jobs = count_batches(sizes, n_samples, args.batch_size)
    jobs = make_batches(sizes, n_samples, args.batch_size, cfg["seed"])

    print(
        f"\nStarting {total_jobs:,} batches ({len(sizes)} sizes x "
        f"{n_samples:,} boxes) with {args.workers} workers...\n"
    )

    start_time = time.time()
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        run_pool(jobs, writer, workers=args.workers, total_jobs=total_jobs)

    elapsed = time.time() - start_time
    print(f"\nDone in {_fmt_minutes(elapsed)}")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
