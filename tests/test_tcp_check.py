import socket
import unittest
from unittest.mock import MagicMock, patch

from tcpdial.checks import tcp_check
from tcpdial.checks.tcp_check import run_tcp
from tcpdial.errors import DialError, DialErrorKind


class TcpCheckTests(unittest.TestCase):
    def test_reachable_port_reports_ok(self) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as srv:
            srv.bind(("127.0.0.1", 0))
            srv.listen(1)
            port = srv.getsockname()[1]

            res = run_tcp("127.0.0.1", port, timeout_s=2)

        self.assertTrue(res.ok)
        self.assertGreaterEqual(res.latency_ms, 0)
        self.assertIsNone(res.error_kind)
        self.assertIsNone(res.error)

    def test_closed_port_reports_not_connected(self) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 0))
            port = s.getsockname()[1]

        res = run_tcp("127.0.0.1", port, timeout_s=2)

        self.assertFalse(res.ok)
        self.assertEqual(res.error_kind, "not_connected")
        self.assertIn(f"127.0.0.1:{port}", res.error)

    def test_dial_error_kind_is_reported(self) -> None:
        err = DialError(DialErrorKind.INVALID_ARGUMENT, "cannot resolve 'nope' port '80'")
        with patch("tcpdial.checks.tcp_check.dial", side_effect=err):
            res = run_tcp("nope", "80", timeout_s=1)

        self.assertFalse(res.ok)
        self.assertEqual(res.error_kind, "invalid_argument")
        self.assertIn("cannot resolve", res.error)

    def test_socket_is_closed_after_successful_check(self) -> None:
        conn = MagicMock()
        with patch("tcpdial.checks.tcp_check.dial", return_value=conn) as mock_dial:
            res = run_tcp("db.local", 5432, timeout_s=3)

        self.assertTrue(res.ok)
        mock_dial.assert_called_once_with("db.local", 5432, timeout=3)
        conn.__exit__.assert_called_once()

    def test_default_timeout_from_settings(self) -> None:
        with patch.object(tcp_check.settings, "TCPDIAL_CHECK_TIMEOUT_SECONDS", 1.5), patch(
            "tcpdial.checks.tcp_check.dial", return_value=MagicMock()
        ) as mock_dial:
            run_tcp("db.local", 5432)

        mock_dial.assert_called_once_with("db.local", 5432, timeout=1.5)


if __name__ == "__main__":
    unittest.main()
