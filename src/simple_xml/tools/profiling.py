"""Performance profiling tools for simple-xml.

Measures wall-clock time and resident memory (through psutil) of parse runs
and aggregates them into a report.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import psutil

from simple_xml.parsing import RecursiveDescentParser, XMLError
from simple_xml.shared import ParserConfig, get_logger

BYTES_PER_MB = 1024 * 1024


@dataclass
class ProfilingSession:
    """Measurements for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    iterations: int = 1
    element_count: int = 0
    success: bool = True
    error_kind: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        """Total session duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def average_duration_ms(self) -> float:
        """Duration of a single iteration in milliseconds."""
        return self.total_duration_ms / self.iterations if self.iterations else 0.0

    @property
    def memory_delta(self) -> int:
        """Resident memory change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_mb_per_s(self) -> float:
        """Processing throughput in MB/s (characters counted as bytes)."""
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return (self.input_size * self.iterations / BYTES_PER_MB) / duration_s

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "iterations": self.iterations,
            "success": self.success,
            "error_kind": self.error_kind,
            "element_count": self.element_count,
            "total_duration_ms": self.total_duration_ms,
            "average_duration_ms": self.average_duration_ms,
            "memory_delta": self.memory_delta,
            "throughput_mb_s": self.throughput_mb_per_s,
            "metadata": self.metadata,
        }


@dataclass
class PerformanceReport:
    """Aggregate over several profiling sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def success_count(self) -> int:
        return sum(1 for s in self.sessions if s.success)

    @property
    def average_duration_ms(self) -> float:
        """Average per-iteration duration across sessions."""
        if not self.sessions:
            return 0.0
        return sum(s.average_duration_ms for s in self.sessions) / len(self.sessions)

    @property
    def average_throughput_mb_per_s(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.throughput_mb_per_s for s in self.sessions) / len(self.sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation_time": self.generation_time,
            "summary": {
                "session_count": self.session_count,
                "success_count": self.success_count,
                "average_duration_ms": self.average_duration_ms,
                "average_throughput_mb_s": self.average_throughput_mb_per_s,
            },
            "sessions": [session.to_dict() for session in self.sessions],
        }


class PerformanceProfiler:
    """Profiler for parse operations.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> session = profiler.profile_text("small", "<a><b/></a>", iterations=10)
        >>> session.element_count
        2
        >>> report = profiler.generate_report()
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process()

    def _memory_usage(self) -> int:
        return self._process.memory_info().rss

    def start_session(self, session_id: str, input_size: int = 0) -> ProfilingSession:
        """Start a new profiling session."""
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.time(),
            input_size=input_size,
            memory_start=self._memory_usage(),
        )
        self.logger.debug(
            "Started profiling session",
            extra={"session_id": session_id, "input_size": input_size},
        )
        return session

    def end_session(self, session: ProfilingSession) -> None:
        """End a profiling session and store results."""
        session.end_time = time.time()
        session.memory_end = self._memory_usage()
        self.sessions.append(session)
        self.logger.info(
            "Ended profiling session",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
                "throughput_mb_s": session.throughput_mb_per_s,
                "success": session.success,
            },
        )

    def profile_text(
        self, session_id: str, text: str, iterations: int = 1
    ) -> ProfilingSession:
        """Parse ``text`` ``iterations`` times and record the measurements.

        A malformed document ends the session early; the error kind is kept
        on the session instead of being raised.
        """
        if iterations <= 0:
            raise ValueError("iterations must be > 0")

        session = self.start_session(session_id, len(text))
        session.iterations = iterations
        try:
            for _ in range(iterations):
                parser = RecursiveDescentParser(text, self.config)
                parser.parse()
            session.element_count = parser.element_count
        except XMLError as e:
            session.success = False
            session.error_kind = e.kind.name
            session.metadata["error"] = e.message
        finally:
            self.end_session(session)
        return session

    def profile_file(self, file_path: Path, iterations: int = 1,
                     encoding: str = "utf-8") -> ProfilingSession:
        """Profile parsing of a file's contents (reading is not timed)."""
        text = Path(file_path).read_text(encoding=encoding)
        session = self.profile_text(str(file_path), text, iterations)
        session.metadata["file"] = str(file_path)
        return session

    def generate_report(self) -> PerformanceReport:
        """Generate a report over every finished session."""
        return PerformanceReport(sessions=self.sessions.copy(), generation_time=time.time())

    def save_report(self, report: PerformanceReport, output_path: Path) -> None:
        """Save performance report to a JSON file."""
        output_path.write_text(json.dumps(report.to_dict(), indent=2))
        self.logger.info(
            "Saved performance report",
            extra={"output_path": str(output_path), "session_count": report.session_count},
        )
