from __future__ import annotations

from tcpdial.errors import DialError
from tcpdial.models import Endpoint


def format_dial_failure(host: str, port: str | int, exc: DialError) -> str:
    target = Endpoint(host=host, port=port)
    lines = [f"Dial {target} failed ({exc.kind.value}): {exc.strerror}"]
    for n, attempt in enumerate(exc.attempts, start=1):
        # sockaddr is (host, port) for IPv4 and (host, port, flow, scope) for IPv6
        addr = Endpoint(host=attempt.address[0], port=attempt.address[1])
        lines.append(f"  #{n} {addr}: {attempt.error}")
    return "\n".join(lines)
