# tests/test_client_config.py

"""Tests for ClientConfig defaults, overrides and environment loading."""

import dataclasses
import os
import sys
import unittest
from unittest.mock import MagicMock, patch

from psref.config.client_config import ClientConfig
from psref.config.settings import Settings
from psref.transport.rate_limiter import TokenBucket


class TestClientConfig(unittest.TestCase):
    """Every option defaults independently."""

    def test_defaults(self) -> None:
        config = ClientConfig(session=MagicMock())
        self.assertEqual(config.base_url, Settings.DEFAULT_BASE_URL)
        self.assertEqual(config.retries, 3)
        self.assertIsInstance(config.rate_limiter, TokenBucket)
        self.assertEqual(config.rate_limiter.burst, 10)
        self.assertIsNone(config.debug)

    def test_default_session_created(self) -> None:
        with patch(
            "psref.config.client_config.curl_requests.Session"
        ) as session_cls:
            config = ClientConfig(session=None)
        self.assertIs(config.session, session_cls.return_value)

    def test_each_client_gets_own_limiter(self) -> None:
        a = ClientConfig(session=MagicMock())
        b = ClientConfig(session=MagicMock())
        self.assertIsNot(a.rate_limiter, b.rate_limiter)

    def test_rate_limit_disabled(self) -> None:
        config = ClientConfig(session=MagicMock(), rate_limiter=None)
        self.assertIsNone(config.rate_limiter)

    def test_base_url_trailing_slash_stripped(self) -> None:
        config = ClientConfig(base_url="http://host:8081/", session=MagicMock())
        self.assertEqual(config.base_url, "http://host:8081")

    def test_empty_base_url_uses_default(self) -> None:
        config = ClientConfig(base_url="", session=MagicMock())
        self.assertEqual(config.base_url, Settings.DEFAULT_BASE_URL)

    def test_frozen(self) -> None:
        config = ClientConfig(session=MagicMock())
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.retries = 5  # type: ignore[misc]

    def test_with_options(self) -> None:
        session = MagicMock()
        config = ClientConfig(session=session)
        changed = config.with_options(retries=-1, base_url="http://x/")
        self.assertEqual(changed.retries, -1)
        self.assertEqual(changed.base_url, "http://x")
        self.assertIs(changed.session, session)
        self.assertEqual(config.retries, 3)

    def test_invalid_timeout(self) -> None:
        with self.assertRaises(ValueError):
            ClientConfig(session=MagicMock(), request_timeout=0)


class TestClientConfigFromEnv(unittest.TestCase):
    """PSREF_* variables feed the config; keyword overrides win."""

    def test_no_env_means_defaults(self) -> None:
        config = ClientConfig.from_env(session=MagicMock())
        self.assertEqual(config.base_url, Settings.DEFAULT_BASE_URL)
        self.assertEqual(config.retries, Settings.DEFAULT_RETRIES)
        self.assertIsNone(config.debug)

    @patch.dict(
        os.environ,
        {
            "PSREF_BASE_URL": "http://mirror.test/",
            "PSREF_RETRIES": "-1",
            "PSREF_DEBUG": "true",
        },
    )
    def test_env_values(self) -> None:
        config = ClientConfig.from_env(session=MagicMock())
        self.assertEqual(config.base_url, "http://mirror.test")
        self.assertEqual(config.retries, -1)
        self.assertIs(config.debug, sys.stderr)

    @patch.dict(
        os.environ, {"PSREF_RATE_INTERVAL": "0.5", "PSREF_RATE_BURST": "4"}
    )
    def test_env_rate(self) -> None:
        config = ClientConfig.from_env(session=MagicMock())
        self.assertAlmostEqual(config.rate_limiter.rate, 2.0)
        self.assertEqual(config.rate_limiter.burst, 4)

    @patch.dict(os.environ, {"PSREF_RATE_BURST": "0"})
    def test_env_disables_rate_limit(self) -> None:
        config = ClientConfig.from_env(session=MagicMock())
        self.assertIsNone(config.rate_limiter)

    @patch.dict(os.environ, {"PSREF_RETRIES": "7"})
    def test_override_beats_env(self) -> None:
        config = ClientConfig.from_env(session=MagicMock(), retries=1)
        self.assertEqual(config.retries, 1)


if __name__ == "__main__":
    unittest.main()
