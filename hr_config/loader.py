"""
Configuration Loader (``hr_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
``hr_config.schema`` dataclasses.  Runtime code calls
``hr_config.get_active_config()`` instead of this module.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values  -> ``ValueError``.

Omitted sections and keys fall back to the dataclass defaults.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from hr_config.schema import DatabaseConfig, HRConfig, TenurePolicy
from hr_engines.bonus import BonusPolicy
from hr_engines.budget_compliance import BudgetPolicy
from hr_engines.headcount import HeadcountPolicy, HeadcountTier
from hr_engines.promotion import PromotionPolicy
from hr_engines.retention import RetentionPolicy
from hr_engines.salary_adjustment import AdjustmentPolicy
from hr_kernel.domain.tenure import TenureMethod


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of a parsed configuration document."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_decimal(value: Any, key: str) -> Decimal:
    """Parse a YAML number or string as Decimal (via str, never float math)."""
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{key}: {value!r} is not a number") from exc


def _section(data: dict[str, Any], name: str, allowed: set[str]) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section {name!r} must be a mapping")
    unknown = set(section) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in {name!r}: {sorted(unknown)}")
    return section


def _decimals(section: dict[str, Any], prefix: str, keys: tuple[str, ...]) -> dict[str, Decimal]:
    return {
        k: parse_decimal(section[k], f"{prefix}.{k}")
        for k in keys
        if k in section
    }


def parse_database(data: dict[str, Any]) -> DatabaseConfig:
    s = _section(data, "database", {"url", "echo", "pool_size", "max_overflow"})
    return DatabaseConfig(**s)


def parse_tenure(data: dict[str, Any]) -> TenurePolicy:
    s = _section(data, "tenure", {"method"})
    if "method" not in s:
        return TenurePolicy()
    try:
        return TenurePolicy(method=TenureMethod(s["method"]))
    except ValueError as exc:
        raise ValueError(f"tenure.method: unknown method {s['method']!r}") from exc


def parse_adjustment(data: dict[str, Any]) -> AdjustmentPolicy:
    keys = ("underpaid_multiplier", "high_earner_multiplier", "tenure_bonus_points")
    s = _section(data, "adjustment", set(keys))
    return AdjustmentPolicy(**_decimals(s, "adjustment", keys))


def parse_bonus(data: dict[str, Any]) -> BonusPolicy:
    s = _section(
        data,
        "bonus",
        {"rating_offsets", "tenure_multipliers", "max_bonus_fraction", "default_base_percentage"},
    )
    kwargs: dict[str, Any] = _decimals(
        s, "bonus", ("max_bonus_fraction", "default_base_percentage")
    )
    if "rating_offsets" in s:
        kwargs["rating_offsets"] = tuple(
            (int(rating), parse_decimal(offset, f"bonus.rating_offsets.{rating}"))
            for rating, offset in sorted(s["rating_offsets"].items(), reverse=True)
        )
    if "tenure_multipliers" in s:
        kwargs["tenure_multipliers"] = tuple(
            (int(years), parse_decimal(mult, f"bonus.tenure_multipliers.{years}"))
            for years, mult in sorted(s["tenure_multipliers"].items(), reverse=True)
        )
    return BonusPolicy(**kwargs)


def parse_budget(data: dict[str, Any]) -> BudgetPolicy:
    s = _section(data, "budget", {"warning_ratio", "caution_ratio", "enforce_budget"})
    kwargs: dict[str, Any] = _decimals(s, "budget", ("warning_ratio", "caution_ratio"))
    if "enforce_budget" in s:
        kwargs["enforce_budget"] = bool(s["enforce_budget"])
    return BudgetPolicy(**kwargs)


def parse_headcount(data: dict[str, Any]) -> HeadcountPolicy:
    s = _section(
        data,
        "headcount",
        {
            "tiers",
            "workload_per_project",
            "empty_department_score",
            "salary_overhead",
            "minimum_headcount",
            "count_projects_across_all_departments",
        },
    )
    kwargs: dict[str, Any] = _decimals(s, "headcount", ("salary_overhead",))
    for key in ("workload_per_project", "empty_department_score", "minimum_headcount"):
        if key in s:
            kwargs[key] = int(s[key])
    if "count_projects_across_all_departments" in s:
        kwargs["count_projects_across_all_departments"] = bool(
            s["count_projects_across_all_departments"]
        )
    if "tiers" in s:
        kwargs["tiers"] = tuple(
            HeadcountTier(
                comparison=t["comparison"],
                threshold=int(t["threshold"]),
                delta=int(t["delta"]),
            )
            for t in s["tiers"]
        )
    return HeadcountPolicy(**kwargs)


def parse_retention(data: dict[str, Any]) -> RetentionPolicy:
    keys = ("high_risk_percentile", "medium_risk_percentile")
    s = _section(data, "retention", set(keys) | {"transition_windows"})
    kwargs: dict[str, Any] = _decimals(s, "retention", keys)
    if "transition_windows" in s:
        kwargs["transition_windows"] = tuple(
            (int(low), int(high)) for low, high in s["transition_windows"]
        )
    return RetentionPolicy(**kwargs)


def parse_promotion(data: dict[str, Any]) -> PromotionPolicy:
    s = _section(data, "promotion", {"senior_years", "mid_level_years", "raise_salary_ceiling"})
    kwargs: dict[str, Any] = _decimals(s, "promotion", ("raise_salary_ceiling",))
    for key in ("senior_years", "mid_level_years"):
        if key in s:
            kwargs[key] = int(s[key])
    return PromotionPolicy(**kwargs)


_TOP_LEVEL_KEYS = {
    "config_id",
    "version",
    "database",
    "tenure",
    "adjustment",
    "bonus",
    "budget",
    "headcount",
    "retention",
    "promotion",
}


def parse_config(data: dict[str, Any]) -> HRConfig:
    """
    Parse a whole configuration document.

    Raises:
        ValueError: unknown keys or invalid values.
    """
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")
    try:
        return HRConfig(
            config_id=str(data.get("config_id", "default")),
            version=int(data.get("version", 1)),
            database=parse_database(data),
            tenure=parse_tenure(data),
            adjustment=parse_adjustment(data),
            bonus=parse_bonus(data),
            budget=parse_budget(data),
            headcount=parse_headcount(data),
            retention=parse_retention(data),
            promotion=parse_promotion(data),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def load_config(path: Path) -> HRConfig:
    return parse_config(load_yaml_file(path))
