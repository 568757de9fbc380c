"""
Unit Tests for the Catalog Source

Run with:
    python -m pytest tests/test_catalog_source.py -v
"""

import unittest
from unittest import mock

import requests

from orbit_tracker.catalog_source import celestrak_url, fetch_catalog


class TestCelestrakUrl(unittest.TestCase):

    def test_group_url(self):
        self.assertEqual(
            celestrak_url("stations"),
            "https://celestrak.org/NORAD/elements/gp.php?GROUP=stations&FORMAT=tle",
        )

    def test_custom_base(self):
        self.assertTrue(celestrak_url("gps-ops", "http://mirror").startswith("http://mirror/"))

    def test_unknown_group(self):
        with self.assertRaises(ValueError):
            celestrak_url("everything")


class TestFetchCatalog(unittest.IsolatedAsyncioTestCase):

    async def test_success(self):
        response = mock.Mock(text="ISS\n1 ...\n2 ...\n")
        with mock.patch("orbit_tracker.catalog_source.requests.get",
                        return_value=response) as get:
            result = await fetch_catalog("http://example/tle", timeout=5)

        get.assert_called_once_with("http://example/tle", timeout=5)
        response.raise_for_status.assert_called_once_with()
        self.assertTrue(result.ok)
        self.assertEqual(result.text, "ISS\n1 ...\n2 ...\n")

    async def test_connection_error(self):
        with mock.patch("orbit_tracker.catalog_source.requests.get",
                        side_effect=requests.ConnectionError("unreachable")):
            result = await fetch_catalog("http://example/tle")

        self.assertFalse(result.ok)
        self.assertIn("unreachable", result.error)

    async def test_http_error(self):
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        with mock.patch("orbit_tracker.catalog_source.requests.get", return_value=response):
            result = await fetch_catalog("http://example/tle")

        self.assertFalse(result.ok)
        self.assertIsNone(result.text)


if __name__ == "__main__":
    unittest.main()
