"""Developer tools for simple-xml."""

from .profiling import PerformanceProfiler, PerformanceReport, ProfilingSession

__all__ = [
    "PerformanceProfiler",
    "PerformanceReport",
    "ProfilingSession",
]
