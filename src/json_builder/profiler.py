"""Performance profiler for JSON Builder operations."""

import json
import logging
import threading
import time
import psutil
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class EncodeMetrics:
    """Performance metrics for a single encode operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float


class ProfileSession:
    """Mutable state for one profiled operation."""

    def __init__(self, operation_name: str, input_size: int):
        self.operation_name = operation_name
        self.input_size = input_size
        self.output_size = 0
        self.start_time = time.time()
        self.start_memory = _rss_mb()

    def record_output(self, output_size: int) -> None:
        """Record the size of the produced output in bytes."""
        self.output_size = output_size


class PerformanceProfiler:
    """
    Performance profiler for encode operations.

    Each profiled operation gets its own session, so concurrent encode
    calls may share one profiler. Completed metrics are appended to a
    lock-protected history.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[EncodeMetrics] = []
        self._lock = threading.Lock()

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0) -> Iterator[ProfileSession]:
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        session = ProfileSession(operation_name, input_size)
        self.logger.debug(f"Started profiling: {operation_name}")
        try:
            yield session
        finally:
            self._finish(session)

    def _finish(self, session: ProfileSession) -> EncodeMetrics:
        end_time = time.time()
        duration = end_time - session.start_time
        size = max(session.input_size, session.output_size)
        throughput = (size / 1024 / 1024) / duration if duration > 0 else 0

        metrics = EncodeMetrics(
            operation_name=session.operation_name,
            start_time=session.start_time,
            end_time=end_time,
            duration=duration,
            input_size=session.input_size,
            output_size=session.output_size,
            memory_start_mb=session.start_memory,
            memory_end_mb=_rss_mb(),
            throughput_mbps=throughput
        )

        with self._lock:
            self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {session.operation_name}: "
                         f"{duration * 1000:.2f}ms, {session.output_size} bytes out, "
                         f"{metrics.memory_end_mb:.1f} MB RSS")
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        with self._lock:
            history = list(self.metrics_history)

        if not history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in history)
        total_output = sum(m.output_size for m in history)

        return {
            "total_operations": len(history),
            "total_duration": total_duration,
            "total_output_bytes": total_output,
            "average_duration": total_duration / len(history),
            "average_throughput_mbps": sum(m.throughput_mbps for m in history) / len(history),
            "max_memory_mb": max(m.memory_end_mb for m in history),
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "output_size": m.output_size
                }
                for m in history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv", "summary")

        Returns:
            Formatted metrics string
        """
        with self._lock:
            history = list(self.metrics_history)

        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                    "memory_end_mb": m.memory_end_mb,
                    "throughput_mbps": m.throughput_mbps
                }
                for m in history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,input_size,output_size,memory_end_mb,throughput_mbps"]
            for m in history:
                lines.append(f"{m.operation_name},{m.duration},{m.input_size},{m.output_size},"
                             f"{m.memory_end_mb},{m.throughput_mbps}")
            return "\n".join(lines)

        elif format == "summary":
            summary = self.get_performance_summary()
            if not summary["total_operations"]:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Total Duration: {summary['total_duration']:.4f}s",
                f"  Total Output: {summary['total_output_bytes']} bytes",
                f"  Average Throughput: {summary['average_throughput_mbps']:.2f} MB/s",
                f"  Max Memory: {summary['max_memory_mb']:.1f} MB"
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")


def _rss_mb() -> float:
    """Resident set size of the current process in MB."""
    return psutil.Process().memory_info().rss / 1024 / 1024
