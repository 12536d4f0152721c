import argparse
import unittest

from minischeme.lang.config import Config


class ConfigTestCase(unittest.TestCase):

    def test_defaults(self):
        config = Config()
        self.assertEqual(100, config.max_depth)
        self.assertTrue(config.color)
        self.assertTrue(config.fatal)

    def test_max_depth_must_be_positive(self):
        should_fail = [0, -3, 2.5, "10", True, None]
        for case in should_fail:
            self.assertRaises(ValueError, Config, max_depth=case)

    def test_from_args(self):
        args = argparse.Namespace(max_depth=7, no_color=True, file=None, expr=None)
        self.assertEqual(Config(max_depth=7, color=False, fatal=False), Config.from_args(args))

        args = argparse.Namespace(max_depth=7, no_color=False, file="a.scm", expr=None)
        self.assertTrue(Config.from_args(args).fatal)

        args = argparse.Namespace(max_depth=7, no_color=False, file=None, expr="(+ 1 2)")
        self.assertTrue(Config.from_args(args).fatal)


if __name__ == '__main__':
    unittest.main()
