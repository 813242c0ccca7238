from __future__ import annotations

import time

from tcpdial.checks.results import CheckResult
from tcpdial.config import settings
from tcpdial.dialer import dial
from tcpdial.errors import DialError
from tcpdial.formatting import format_dial_failure


def run_tcp(host: str, port: str | int, timeout_s: float | None = None) -> CheckResult:
    if timeout_s is None:
        timeout_s = settings.TCPDIAL_CHECK_TIMEOUT_SECONDS
    start = time.perf_counter()
    try:
        with dial(host, port, timeout=timeout_s):
            latency_ms = int((time.perf_counter() - start) * 1000)
            return CheckResult(ok=True, latency_ms=latency_ms)
    except DialError as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        return CheckResult(
            ok=False,
            latency_ms=latency_ms,
            error_kind=e.kind.value,
            error=format_dial_failure(host, port, e),
        )
