"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import evbus


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(evbus.load_config))
        self.assertTrue(callable(evbus.configure_logging))
        self.assertIsNotNone(evbus.EventRegistry)
        self.assertIsNotNone(evbus.Listener)
        self.assertEqual(evbus.UNLIMITED, -1)
        self.assertIsNotNone(evbus.EventBusError)
        self.assertIsNotNone(evbus.ConfigValidationError)

    def test_all_names_resolve(self) -> None:
        for name in evbus.__all__:
            self.assertIsNotNone(getattr(evbus, name))

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(evbus, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
