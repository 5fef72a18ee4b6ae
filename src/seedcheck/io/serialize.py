"""Serialization for battery configs and check reports."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from seedcheck import __version__
from seedcheck.config.schema import BatteryConfig
from seedcheck.validation.report import CheckReport


def compute_config_hash(config: BatteryConfig) -> str:
    """Compute a deterministic SHA-256 hash of a battery config.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical config always produces the same hash.
    """
    canonical = json.dumps(config.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_config(config: BatteryConfig) -> str:
    """Serialize a battery config to a JSON string."""
    return json.dumps(config.model_dump(mode="json"), indent=2)


def load_config(json_str: str) -> BatteryConfig:
    """Deserialize a battery config from a JSON string."""
    data: dict[str, Any] = json.loads(json_str)
    return BatteryConfig.model_validate(data)


def dump_report(report: CheckReport, config: BatteryConfig | None = None) -> str:
    """Serialize a finished report, with the config that produced it, to JSON."""
    data = report.to_dict()
    data["engine_version"] = __version__
    if config is not None:
        data["config"] = config.model_dump(mode="json")
        data["config_hash"] = compute_config_hash(config)
    return json.dumps(data, indent=2)
