import argparse
import contextlib
import io
import unittest

from mmheap.auxiliary.argparseutils import (bool_options, non_negative_int,
                                            optional_bool, optional_int)


class TestArgparseUtils(unittest.TestCase):
    def test_optional_bool(self):
        self.assertTrue(optional_bool("yes"))
        self.assertFalse(optional_bool("Off"))
        self.assertIsNone(optional_bool("None"))
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(ValueError):
                optional_bool("maybe")

    def test_optional_int(self):
        self.assertEqual(optional_int("12"), 12)
        self.assertIsNone(optional_int(""))
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(ValueError):
                optional_int("1.5")

    def test_non_negative_int(self):
        self.assertEqual(non_negative_int("0"), 0)
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(ValueError):
                non_negative_int("-3")

    def test_bool_options(self):
        parser = argparse.ArgumentParser()
        parser.add_argument("--log", **bool_options(default=False))
        self.assertFalse(parser.parse_args([]).log)
        self.assertTrue(parser.parse_args(["--log"]).log)
        self.assertFalse(parser.parse_args(["--log", "no"]).log)
