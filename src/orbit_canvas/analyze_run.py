"""Analyze a recorded canvas run and generate frame timing figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
SLOW_FRAME_FACTOR = 2.0  # frames slower than this multiple of the target interval


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {
                "t": float(row["t"]),
                "type": row["type"],
                "component": row["component"],
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {"mount": 0, "resize": 0, "regenerate": 0, "teardown": 0}
    for event in events:
        if event["type"] in summary:
            summary[event["type"]] += 1
    return summary


def count_slow_frames(dt: np.ndarray, target_fps: float) -> int:
    if dt.size == 0 or target_fps <= 0:
        return 0
    threshold = SLOW_FRAME_FACTOR / target_fps
    return int(np.count_nonzero(dt > threshold))


def mean_fps(dt: np.ndarray) -> float | None:
    positive = dt[dt > 0.0]
    if positive.size == 0:
        return None
    return float(1.0 / positive.mean())


def plot_frame_times(fig_dir: Path, ts: Dict[str, np.ndarray], target_fps: float) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["frame"], ts["dt"] * 1000.0, color="#4dabf7", lw=1)
    if target_fps > 0:
        ax.axhline(1000.0 / target_fps, color="#d9480f", linestyle="--", alpha=0.6, label="Target")
        ax.legend()
    ax.set_xlabel("frame")
    ax.set_ylabel("frame time [ms]")
    ax.set_title("Frame time")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "frame_time.png", dpi=150)
    plt.close(fig)


def plot_fps(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["fps"], color="#94d82d")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("fps")
    ax.set_title("Achieved frame rate")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "fps.png", dpi=150)
    plt.close(fig)


def plot_angle(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["angle"], color="#9775fa")
    for event in events:
        if event["type"] == "regenerate":
            ax.axvline(event["t"], color="#d9480f", linestyle=":", alpha=0.5)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("angle [deg]")
    ax.set_title("Globe rotation (dotted: fleet regenerated)")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "angle.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    frames: int,
    fps: float | None,
    slow_frames: int,
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Frames: {frames}")
    if fps is not None:
        print(f" Mean fps: {fps:.1f}")
    else:
        print(" Mean fps: not available")
    print(f" Slow frames (> {SLOW_FRAME_FACTOR:g}x target interval): {slow_frames}")
    print(
        " Events:" +
        ", ".join(f" {etype}: {count}" for etype, count in event_summary.items())
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-dir", type=Path, default=Path("data") / "runs", help="Runs directory")
    args = parser.parse_args(argv)

    base_runs_dir = args.runs_dir
    if args.run_dir:
        run_path = Path(args.run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / args.run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_id = last_run_file.read_text(encoding="utf-8").strip()
        run_path = base_runs_dir / run_id

    if not run_path.is_dir():
        parser.error(f"Could not find run directory: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing timeseries.csv or events.csv.")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)

    if not ts or ts.get("frame", np.array([])).size == 0:
        parser.error("timeseries.csv is empty, nothing to analyze.")

    target_fps = float(meta.get("fps") or 0.0)
    fig_dir = ensure_fig_dir(run_path)
    plot_frame_times(fig_dir, ts, target_fps)
    plot_fps(fig_dir, ts)
    plot_angle(fig_dir, ts, events)

    print_summary(
        run_path,
        int(ts["frame"].size),
        mean_fps(ts["dt"]),
        count_slow_frames(ts["dt"], target_fps),
        summarize_events(events),
    )


if __name__ == "__main__":
    main()
