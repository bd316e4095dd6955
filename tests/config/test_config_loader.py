"""
Tests for hr_config: the shipped default set, YAML overrides, validation
and the HR_CONFIG_TRACE record.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from hr_config import DATABASE_URL_ENV, HRConfig, get_active_config
from hr_config.loader import compute_checksum, load_yaml_file, parse_config
from hr_engines.headcount import HeadcountTier
from hr_kernel.domain.tenure import TenureMethod


@pytest.fixture(autouse=True)
def _no_database_override(monkeypatch):
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "hr.yaml"
    path.write_text(text)
    return path


class TestDefaultConfig:

    def test_default_set_matches_dataclass_defaults(self):
        assert get_active_config() == HRConfig()

    def test_default_values(self):
        config = get_active_config()

        assert config.tenure.method == TenureMethod.ELAPSED
        assert config.bonus.max_bonus_fraction == Decimal("0.20")
        assert config.budget.enforce_budget is False
        assert config.headcount.count_projects_across_all_departments is True
        assert config.retention.transition_windows == ((12, 24), (36, 48))

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setenv(DATABASE_URL_ENV, "sqlite:///override.db")

        config = get_active_config()

        assert config.database.url == "sqlite:///override.db"
        assert config.database.pool_size == HRConfig().database.pool_size

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")


class TestCustomConfig:

    def test_partial_file_falls_back_to_defaults(self, tmp_path):
        path = _write(tmp_path, "config_id: lean\nversion: 3\n")

        config = get_active_config(path)

        assert config.config_id == "lean"
        assert config.version == 3
        assert config.bonus == HRConfig().bonus

    def test_overrides(self, tmp_path):
        path = _write(
            tmp_path,
            """
tenure:
  method: calendar
budget:
  enforce_budget: true
  warning_ratio: "0.95"
headcount:
  count_projects_across_all_departments: false
  tiers:
    - {comparison: ">", threshold: 200, delta: 3}
retention:
  transition_windows:
    - [6, 12]
bonus:
  rating_offsets:
    5: "10"
""",
        )

        config = get_active_config(path)

        assert config.tenure.method == TenureMethod.CALENDAR
        assert config.budget.enforce_budget is True
        assert config.budget.warning_ratio == Decimal("0.95")
        assert config.budget.caution_ratio == HRConfig().budget.caution_ratio
        assert config.headcount.count_projects_across_all_departments is False
        assert config.headcount.tiers == (HeadcountTier(">", 200, 3),)
        assert config.retention.transition_windows == ((6, 12),)
        assert config.bonus.rating_offsets == ((5, Decimal("10")),)

    def test_numbers_parsed_as_decimal(self, tmp_path):
        path = _write(tmp_path, "adjustment:\n  underpaid_multiplier: 1.1\n")

        config = get_active_config(path)

        assert config.adjustment.underpaid_multiplier == Decimal("1.1")


class TestValidation:

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown configuration sections"):
            parse_config({"payroll": {}})

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown keys in 'bonus'"):
            parse_config({"bonus": {"max_bonus": "0.3"}})

    def test_unknown_tenure_method(self):
        with pytest.raises(ValueError, match="tenure.method"):
            parse_config({"tenure": {"method": "lunar"}})

    def test_non_numeric_value(self):
        with pytest.raises(ValueError, match="budget.warning_ratio"):
            parse_config({"budget": {"warning_ratio": "lots"}})

    def test_invalid_tier_comparison(self):
        with pytest.raises(ValueError):
            parse_config({"headcount": {"tiers": [{"comparison": "=", "threshold": 1, "delta": 1}]}})

    def test_tier_missing_field(self):
        with pytest.raises(ValueError, match="Invalid configuration"):
            parse_config({"headcount": {"tiers": [{"comparison": ">", "threshold": 1}]}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_config({"budget": ["warning_ratio"]})

    def test_empty_database_url(self):
        with pytest.raises(ValueError):
            parse_config({"database": {"url": ""}})


class TestConfigTrace:

    def test_trace_record_emitted(self, captured_logs):
        config = get_active_config()

        [trace] = [r for r in captured_logs() if r["message"] == "HR_CONFIG_TRACE"]
        assert trace["logger"] == "hr_kernel.config"
        assert trace["config_id"] == config.config_id
        assert trace["config_version"] == config.version
        assert trace["tenure_method"] == "elapsed"
        assert trace["database_url_overridden"] is False
        assert trace["config_path"].endswith("default.yaml")
        assert len(trace["checksum"]) == 64

    def test_checksum_is_deterministic(self, tmp_path):
        first = _write(tmp_path, "version: 2\nconfig_id: a\n")
        data = load_yaml_file(first)

        assert compute_checksum(data) == compute_checksum({"config_id": "a", "version": 2})
        assert compute_checksum(data) != compute_checksum({"config_id": "b", "version": 2})
