# sched_core/results.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

from sched_core.schedule import Schedule


@dataclass
class Path:
    """Schedule prefix reaching some vertex, and the cumulative cost of that prefix."""
    xs: Schedule
    cost: float


@dataclass
class OfflineResult:
    xs: Schedule
    cost: float            # cost reported by the search
    objective: float       # cost recomputed from xs by the problem
    runtime_sec: float
    meta: Dict[str, Any] = field(default_factory=dict)
