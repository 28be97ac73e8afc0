"""Configuration helpers for layout components."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class LayoutConfig:
    """Tunable constants of the radial layout and its collision resolver."""

    min_line_distance: float = 120.0
    default_active_radius: float = 80.0
    default_inactive_radius: float = 20.0
    probe_length: float = 10000.0
    parallel_tolerance: float = 0.001
    endpoint_margin: float = 0.001
    max_settle_passes: int = 100
    ledger_tolerance: float = 1e-9
    root_radius: Optional[float] = None
    root_full_circle: bool = False


_LAYOUT_CONFIG = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    return copy.deepcopy(_LAYOUT_CONFIG)


def set_layout_config(config: LayoutConfig) -> None:
    global _LAYOUT_CONFIG
    _LAYOUT_CONFIG = copy.deepcopy(config)
