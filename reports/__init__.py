from __future__ import annotations

from .timing_dashboard import collect_timings, make_timing_dashboard

__all__ = ["collect_timings", "make_timing_dashboard"]
