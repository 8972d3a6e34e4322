import time
from contextlib import contextmanager
from typing import Dict, List, Optional
from core.logger import get_logger

logger = get_logger(__name__)


class PerformanceMonitor:
    """Times the stages of a single run. Create one per run; nothing is shared."""

    def __init__(self):
        self.stages: List[Dict] = []

    @contextmanager
    def measure(self, stage: str, context: Optional[Dict] = None):
        """
        Context manager to measure stage duration.

        Usage:
            with monitor.measure("fetch", {"url": url}):
                html = await fetcher.fetch_url(session, url)
        """
        start_time = time.perf_counter()
        error = None

        try:
            yield
        except Exception as e:
            error = e
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.stages.append({
                "stage": stage,
                "duration_ms": duration_ms,
                "context": context or {},
                "success": error is None,
            })

            if error:
                logger.error(
                    f"{stage} failed: {type(error).__name__}",
                    duration_ms=duration_ms,
                    context=context or {},
                )
            else:
                logger.debug(
                    f"{stage} completed",
                    duration_ms=duration_ms,
                    context=context or {},
                )

    def total_ms(self) -> float:
        return sum(s["duration_ms"] for s in self.stages)

    def log_summary(self):
        """Log one line per measured stage"""
        if not self.stages:
            logger.info("No stages measured")
            return

        for s in self.stages:
            status = "ok" if s["success"] else "failed"
            logger.info(f"[PERF] {s['stage']}: {s['duration_ms']:.0f}ms ({status})")
        logger.info(f"[PERF] total: {self.total_ms():.0f}ms")
