import importlib
import os
import unittest
from unittest.mock import patch


class SettingsTests(unittest.TestCase):
    def _load_config_module(self, env: dict[str, str]):
        with patch.dict(os.environ, env):
            mod = importlib.import_module("tcpdial.config")
            return importlib.reload(mod)

    def tearDown(self) -> None:
        importlib.reload(importlib.import_module("tcpdial.config"))

    def test_defaults(self) -> None:
        mod = self._load_config_module(
            {"TCPDIAL_CONNECT_TIMEOUT_SECONDS": "", "TCPDIAL_CHECK_TIMEOUT_SECONDS": "3"}
        )
        self.assertIsNone(mod.settings.TCPDIAL_CONNECT_TIMEOUT_SECONDS)
        self.assertEqual(mod.settings.TCPDIAL_CHECK_TIMEOUT_SECONDS, 3.0)

    def test_env_overrides(self) -> None:
        mod = self._load_config_module(
            {"TCPDIAL_CONNECT_TIMEOUT_SECONDS": "2.5", "TCPDIAL_CHECK_TIMEOUT_SECONDS": "7"}
        )
        self.assertEqual(mod.settings.TCPDIAL_CONNECT_TIMEOUT_SECONDS, 2.5)
        self.assertEqual(mod.settings.TCPDIAL_CHECK_TIMEOUT_SECONDS, 7.0)


if __name__ == "__main__":
    unittest.main()
