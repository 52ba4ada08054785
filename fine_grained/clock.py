"""Monotonic time base shared by every stopwatch."""

from __future__ import annotations

import time

NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000

# Authoritative time base: monotonic, highest resolution available
now_monotonic_ns = time.perf_counter_ns


def ns_to_ms(ns: int) -> float: return ns / NS_PER_MS
def ms_to_s(ms: int) -> float: return ms * NS_PER_MS / NS_PER_S


__all__ = ["NS_PER_MS", "NS_PER_S", "now_monotonic_ns", "ns_to_ms", "ms_to_s"]
