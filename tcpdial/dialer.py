from __future__ import annotations

import errno
import logging
import socket
from dataclasses import dataclass
from typing import Any

from tcpdial.config import settings
from tcpdial.errors import DialError, DialErrorKind
from tcpdial.models import Endpoint

logger = logging.getLogger(__name__)

# Marks "use settings.TCPDIAL_CONNECT_TIMEOUT_SECONDS"; None means no timeout.
DEFAULT_TIMEOUT: Any = object()

_RESOLVER_ERRORS: dict[int, DialErrorKind] = {
    socket.EAI_AGAIN: DialErrorKind.NETWORK_UNREACHABLE,
    socket.EAI_FAIL: DialErrorKind.NETWORK_DOWN,
    socket.EAI_MEMORY: DialErrorKind.OUT_OF_MEMORY,
    socket.EAI_NONAME: DialErrorKind.INVALID_ARGUMENT,
    socket.EAI_SERVICE: DialErrorKind.INVALID_ARGUMENT,
}

_UNSUPPORTED_FAMILY_ERRNOS = {errno.EAFNOSUPPORT, errno.EPROTONOSUPPORT}
_ALLOCATION_ERRNOS = {errno.ENOMEM, errno.ENOBUFS}


@dataclass(frozen=True)
class ConnectAttempt:
    family: socket.AddressFamily
    address: tuple
    error: OSError


@dataclass
class DialResult:
    conn: socket.socket | None = None
    error: DialError | None = None

    @property
    def ok(self) -> bool:
        return self.conn is not None


def _tcp_protocol() -> int:
    try:
        return socket.getprotobyname("tcp")
    except OSError as exc:
        raise DialError(
            DialErrorKind.PROTOCOL_UNAVAILABLE,
            "tcp is not listed in the host protocol database",
        ) from exc


def _resolve(host: str, port: str | int, proto: int) -> list[tuple]:
    # The C resolver stops reading at NUL, so "80\x0099" would resolve as "80".
    if "\x00" in str(port):
        raise DialError(DialErrorKind.INVALID_ARGUMENT, f"invalid port {port!r}")
    try:
        return socket.getaddrinfo(
            host, port, socket.AF_UNSPEC, socket.SOCK_STREAM, proto
        )
    except socket.gaierror as exc:
        kind = _RESOLVER_ERRORS.get(exc.errno, DialErrorKind.PLATFORM)
        code = exc.errno if kind is DialErrorKind.PLATFORM else None
        raise DialError(
            kind, f"cannot resolve {host!r} port {port!r}: {exc.strerror}", code=code
        ) from exc
    except UnicodeError as exc:
        # Host names the IDNA codec rejects never reach the resolver.
        raise DialError(
            DialErrorKind.INVALID_ARGUMENT, f"invalid host name {host!r}: {exc}"
        ) from exc
    except (OverflowError, ValueError) as exc:
        raise DialError(
            DialErrorKind.INVALID_ARGUMENT,
            f"invalid host {host!r} or port {port!r}: {exc}",
        ) from exc
    except OSError as exc:
        raise DialError(
            DialErrorKind.PLATFORM,
            f"cannot resolve {host!r} port {port!r}: {exc.strerror or exc}",
            code=exc.errno,
        ) from exc


def _open_socket(family: int, socktype: int, proto: int) -> socket.socket:
    try:
        return socket.socket(family, socktype, proto)
    except PermissionError as exc:
        raise DialError(
            DialErrorKind.PERMISSION_DENIED,
            f"not permitted to create a TCP socket: {exc.strerror}",
        ) from exc
    except OSError as exc:
        if exc.errno in _ALLOCATION_ERRNOS:
            raise DialError(
                DialErrorKind.OUT_OF_MEMORY,
                f"cannot allocate a TCP socket: {exc.strerror}",
            ) from exc
        raise


def dial(
    host: str,
    port: str | int,
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> socket.socket:
    """Connect to ``host``/``port`` over TCP and return the connected socket.

    Every address the resolver returns is tried in order with a fresh
    socket; the first one that connects wins. Sockets created for failed
    candidates are closed before moving on, so nothing leaks when
    :class:`DialError` is raised. The returned socket belongs to the
    caller, who is responsible for closing it.

    ``timeout`` bounds each individual connect attempt. It defaults to
    ``TCPDIAL_CONNECT_TIMEOUT_SECONDS``; ``None`` leaves the socket in
    blocking mode with the OS connect timeout. A timeout stays set on the
    returned socket, as with :func:`socket.create_connection`.
    """
    if timeout is DEFAULT_TIMEOUT:
        timeout = settings.TCPDIAL_CONNECT_TIMEOUT_SECONDS
    if timeout is not None and timeout <= 0:
        # Zero would put the socket in non-blocking mode.
        raise DialError(
            DialErrorKind.INVALID_ARGUMENT,
            f"connect timeout must be positive, got {timeout!r}",
        )

    proto = _tcp_protocol()
    candidates = _resolve(host, port, proto)

    attempts: list[ConnectAttempt] = []
    for family, socktype, cand_proto, _, sockaddr in candidates:
        try:
            sock = _open_socket(family, socktype, cand_proto)
        except DialError:
            raise
        except OSError as exc:
            if exc.errno not in _UNSUPPORTED_FAMILY_ERRNOS:
                raise DialError(
                    DialErrorKind.PLATFORM,
                    f"cannot create a TCP socket: {exc.strerror or exc}",
                    code=exc.errno,
                ) from exc
            logger.debug("Skipping candidate %s: %s", sockaddr, exc)
            attempts.append(ConnectAttempt(family, sockaddr, exc))
            continue

        try:
            if timeout is not None:
                sock.settimeout(timeout)
            sock.connect(sockaddr)
        except OSError as exc:
            sock.close()
            logger.debug("Connect to %s failed: %s", sockaddr, exc)
            attempts.append(ConnectAttempt(family, sockaddr, exc))
            continue
        except BaseException:
            sock.close()
            raise

        logger.debug("Connected to %s:%s via %s", host, port, sockaddr)
        return sock

    err = DialError(
        DialErrorKind.NOT_CONNECTED,
        f"could not connect to any of {len(candidates)} address(es) "
        f"for {host!r} port {port!r}",
        attempts=attempts,
    )
    logger.debug("Dial %s:%s failed after %d attempt(s)", host, port, len(attempts))
    if attempts:
        raise err from attempts[-1].error
    raise err


def dial_endpoint(
    endpoint: Endpoint, *, timeout: float | None = DEFAULT_TIMEOUT
) -> socket.socket:
    return dial(endpoint.host, endpoint.port, timeout=timeout)


def try_dial(
    host: str,
    port: str | int,
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> DialResult:
    """Like :func:`dial`, but return the error instead of raising it."""
    try:
        return DialResult(conn=dial(host, port, timeout=timeout))
    except DialError as exc:
        return DialResult(error=exc)
