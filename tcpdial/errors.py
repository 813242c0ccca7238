from __future__ import annotations

import errno
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from tcpdial.dialer import ConnectAttempt


class DialErrorKind(str, Enum):
    PROTOCOL_UNAVAILABLE = "protocol_unavailable"
    PERMISSION_DENIED = "permission_denied"
    OUT_OF_MEMORY = "out_of_memory"
    NETWORK_UNREACHABLE = "network_unreachable"
    NETWORK_DOWN = "network_down"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_CONNECTED = "not_connected"
    PLATFORM = "platform"


# errno reported for each normalized kind; PLATFORM keeps the OS value.
KIND_ERRNO: dict[DialErrorKind, int] = {
    DialErrorKind.PROTOCOL_UNAVAILABLE: errno.ENOPROTOOPT,
    DialErrorKind.PERMISSION_DENIED: errno.EACCES,
    DialErrorKind.OUT_OF_MEMORY: errno.ENOMEM,
    DialErrorKind.NETWORK_UNREACHABLE: errno.ENETUNREACH,
    DialErrorKind.NETWORK_DOWN: errno.ENETDOWN,
    DialErrorKind.INVALID_ARGUMENT: errno.EINVAL,
    DialErrorKind.NOT_CONNECTED: errno.ENOTCONN,
}


class DialError(OSError):
    """Raised when a TCP connection could not be established.

    ``errno`` holds the normalized error number for ``kind`` (or the OS
    value verbatim for ``DialErrorKind.PLATFORM``). ``attempts`` is only
    populated for ``NOT_CONNECTED`` and lists every candidate address that
    was tried, in resolver order.
    """

    def __init__(
        self,
        kind: DialErrorKind,
        message: str,
        *,
        code: int | None = None,
        attempts: Sequence[ConnectAttempt] = (),
    ) -> None:
        if code is None:
            code = KIND_ERRNO.get(kind)
        super().__init__(code, message)
        self.kind = kind
        self.attempts = tuple(attempts)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.strerror}"
