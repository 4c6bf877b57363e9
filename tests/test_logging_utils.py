"""Tests for run recording and the run analyzer."""
import csv
import json

import numpy as np
import pytest

from orbit_canvas import analyze_run
from orbit_canvas.core.logging_utils import RunLogger


def _read_rows(path):
    with path.open(newline="") as fh:
        return list(csv.reader(fh))


@pytest.fixture
def recorded_run(tmp_path):
    with RunLogger(tmp_path, run_id="demo") as logger:
        logger.write_meta({"fps": 60})
        logger.event("mount", "orbital", width=320.0, height=200.0)
        logger.event("regenerate", "orbital", satellites=450, countries=2)
        for frame in range(1, 6):
            dt = 0.1 if frame == 3 else 1.0 / 60.0
            logger.log_ts([frame, frame / 60.0, dt, 60.0, 0.22 * frame, 450, 400, 320, 200])
        logger.event("teardown", "orbital", frames=5)
    return tmp_path / "demo"


class TestRunLogger:
    """CSV layout and bookkeeping."""

    def test_files_and_headers(self, recorded_run):
        ts_rows = _read_rows(recorded_run / "timeseries.csv")
        assert ts_rows[0] == RunLogger.TIMESERIES_HEADER
        assert len(ts_rows) == 6
        ev_rows = _read_rows(recorded_run / "events.csv")
        assert ev_rows[0] == RunLogger.EVENTS_HEADER
        assert [row[1] for row in ev_rows[1:]] == ["mount", "regenerate", "teardown"]
        assert json.loads(ev_rows[2][3]) == {"countries": 2, "satellites": 450}

    def test_last_run_marker_and_meta(self, recorded_run):
        assert (recorded_run.parent / "last_run.txt").read_text(encoding="utf-8") == "demo"
        assert json.loads((recorded_run / "meta.json").read_text(encoding="utf-8")) == {"fps": 60}

    def test_unique_run_ids(self, tmp_path):
        first = RunLogger(tmp_path, run_id="same")
        second = RunLogger(tmp_path, run_id="same")
        assert first.run_dir != second.run_dir
        assert second.run_id == "same_1"
        first.close()
        second.close()

    def test_buffer_flushes_at_threshold(self, tmp_path):
        logger = RunLogger(tmp_path, run_id="flush", timeseries_flush_threshold=2)
        logger.log_ts([1, 0.0, 0.0, 0.0, 0.0, 0, 0, 1, 1])
        assert len(_read_rows(logger.timeseries_path)) == 1
        logger.log_ts([2, 0.0, 0.0, 0.0, 0.0, 0, 0, 1, 1])
        assert len(_read_rows(logger.timeseries_path)) == 3
        logger.close()

    def test_close_is_idempotent(self, tmp_path):
        logger = RunLogger(tmp_path, run_id="twice")
        logger.close()
        logger.close()
        assert logger.closed

    def test_event_without_details(self, tmp_path):
        with RunLogger(tmp_path, run_id="bare") as logger:
            logger.event("mount", "particles")
        rows = _read_rows(tmp_path / "bare" / "events.csv")
        assert rows[1][1:] == ["mount", "particles", ""]


class TestAnalyzeRun:
    """Loading and summarising a recorded run."""

    def test_load_timeseries(self, recorded_run):
        ts = analyze_run.load_timeseries(recorded_run / "timeseries.csv")
        assert set(ts) == set(RunLogger.TIMESERIES_HEADER)
        np.testing.assert_allclose(ts["frame"], [1, 2, 3, 4, 5])

    def test_load_and_summarize_events(self, recorded_run):
        events = analyze_run.load_events(recorded_run / "events.csv")
        assert events[1]["details"] == {"countries": 2, "satellites": 450}
        assert "details" in events[0]
        summary = analyze_run.summarize_events(events)
        assert summary == {"mount": 1, "resize": 0, "regenerate": 1, "teardown": 1}

    def test_frame_statistics(self):
        dt = np.array([0.0, 1.0 / 60.0, 0.1, 1.0 / 60.0])
        assert analyze_run.count_slow_frames(dt, 60.0) == 1
        assert analyze_run.count_slow_frames(dt, 0.0) == 0
        assert analyze_run.mean_fps(np.array([0.0, 0.0])) is None
        assert analyze_run.mean_fps(np.array([0.02, 0.02])) == pytest.approx(50.0)

    def test_main_writes_figures(self, recorded_run, capsys):
        analyze_run.main(["--runs-dir", str(recorded_run.parent)])
        figs = recorded_run / "figs"
        assert {p.name for p in figs.iterdir()} == {"frame_time.png", "fps.png", "angle.png"}
        out = capsys.readouterr().out
        assert "Frames: 5" in out
        assert "Slow frames" in out

    def test_main_missing_run(self, tmp_path):
        with pytest.raises(SystemExit):
            analyze_run.main(["missing", "--runs-dir", str(tmp_path)])
