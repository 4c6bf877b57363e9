"""Tests for the built-in and file-based satellite distributions."""
import json

import pytest

from orbit_canvas.core.model import DistributionEntry, coerce_distribution, distribution_signature
from orbit_canvas.data.distributions import DEFAULT_REPORT, load_report


def _write(tmp_path, payload):
    path = tmp_path / "fleet.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestDistributionEntry:
    def test_rejects_negative_count(self):
        with pytest.raises(ValueError):
            DistributionEntry("USA", -1)

    @pytest.mark.parametrize("count", [1.5, "3", True])
    def test_rejects_non_integer_count(self, count):
        with pytest.raises(ValueError):
            DistributionEntry("USA", count)

    def test_coerce_mixed_inputs(self):
        entries = coerce_distribution(
            [DistributionEntry("USA", 1), {"country": "China", "count": 2}, ("India", 3)]
        )
        assert distribution_signature(entries) == (("USA", 1), ("China", 2), ("India", 3))


class TestLoadReport:
    def test_default_report(self):
        assert DEFAULT_REPORT.total == 7645
        assert DEFAULT_REPORT.by_country[0] == DistributionEntry("USA", 3200)

    def test_reads_file(self, tmp_path):
        path = _write(
            tmp_path,
            {"total": 1200, "by_country": [{"country": "USA", "count": 700}, {"country": "China", "count": 500}]},
        )
        report = load_report(path)
        assert report.total == 1200
        assert [entry.country for entry in report.by_country] == ["USA", "China"]

    def test_total_defaults_to_sum(self, tmp_path):
        path = _write(tmp_path, {"by_country": [["USA", 700], ["China", 500]]})
        assert load_report(path).total == 1200

    def test_empty_file_object(self, tmp_path):
        report = load_report(_write(tmp_path, {}))
        assert report.total == 0
        assert report.by_country == ()

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"total": -5, "by_country": []},
            {"total": "many", "by_country": []},
            {"by_country": [{"country": "USA", "count": -1}]},
        ],
    )
    def test_invalid_payloads(self, tmp_path, payload):
        with pytest.raises(ValueError):
            load_report(_write(tmp_path, payload))
