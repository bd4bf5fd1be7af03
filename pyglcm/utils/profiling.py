# -*- coding: utf-8 -*-
# utils/profiling.py

from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Dict

import psutil


def profile_snapshot() -> Dict[str, Any]:
    rss_kb = psutil.Process().memory_info().rss / 1024.0
    return {"time": time.perf_counter(), "wall": datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f"), "rss_kb": rss_kb}


def profile_delta(start: Dict[str, Any]) -> Dict[str, Any]:
    """Elapsed time and RSS change since a `profile_snapshot`."""
    end = profile_snapshot()

    return {
        "start_time": start["wall"],
        "end_time": end["wall"],
        "total_time_sec": round(end["time"] - start["time"], 6),
        "start_memory_KB": round(start["rss_kb"], 6),
        "end_memory_KB": round(end["rss_kb"], 6),
        "total_memory_KB": round(end["rss_kb"] - start["rss_kb"], 6),
    }
