import io
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import yard
import yardlib


def run_main(argv, inputs=None):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        if inputs is None:
            status = yard.main(argv)
        else:
            with mock.patch("builtins.input", side_effect=inputs):
                status = yard.main(argv)
    return status, out.getvalue(), err.getvalue()


class TestOneShot(unittest.TestCase):
    def test_prints_results(self):
        status, out, err = run_main(["2+3*4", "(2+3)*4", "8-3-2"])
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["14", "20", "3"])
        self.assertEqual(err, "")

    def test_rpn_flag(self):
        status, out, _ = run_main(["--rpn", "12+3*(4-1)"])
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["rpn: 12 3 4 1 - * +", "21"])

    def test_division_by_zero_is_not_an_error(self):
        status, out, _ = run_main(["5/0", "0/0"])
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["inf", "nan"])

    def test_large_and_fractional_results_keep_their_digits(self):
        status, out, _ = run_main(["1000000+1", "123456789", "2/3", "0.1+0.2"])
        self.assertEqual(status, 0)
        self.assertEqual(
            out.splitlines(),
            ["1000001", "123456789", "0.666666666666667", "0.3"],
        )

    def test_verbose_logs_tokens_and_postfix(self):
        with self.assertLogs("yard", "DEBUG") as cm:
            status, out, _ = run_main(["-v", "2+3"])
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["5"])
        messages = [record.getMessage() for record in cm.records]
        self.assertIn("postfix: 2 3 +", messages)
        self.assertTrue(any(m.startswith("tokens: ") for m in messages))

    def test_errors_continue_and_set_status(self):
        status, out, err = run_main(["(1+2", "+1", "2*x", "1+1"])
        self.assertEqual(status, 1)
        self.assertEqual(out.splitlines(), ["2"])
        lines = err.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(all(line.startswith("error: ") for line in lines))
        self.assertIn("'x'", lines[2])


class TestInteractive(unittest.TestCase):
    def test_session(self):
        status, out, err = run_main(
            [], inputs=["2+3", "", "  ", "clear", "(1", "7/2", EOFError()]
        )
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["5", "3.5"])
        self.assertIn("Shunting Yard", err)
        self.assertIn("error: unmatched '('", err)
        self.assertTrue(err.rstrip().endswith("caught EOF"))

    def test_quiet_and_interrupt(self):
        status, out, err = run_main(["-q", "--rpn"], inputs=["1+2", KeyboardInterrupt()])
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(), ["rpn: 1 2 +", "3"])
        self.assertNotIn("Shunting Yard", err)
        self.assertIn("interrupted", err)

    def test_clear_resets_calculator(self):
        calc = yardlib.Calculator()
        calc.tokens = yardlib.tokenize("9")
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            with mock.patch("builtins.input", side_effect=["reset", EOFError()]):
                yard.interactive(calc, quiet=True)
        self.assertEqual(calc.tokens, [])
        self.assertEqual(out.getvalue(), "")


class TestParser(unittest.TestCase):
    def test_defaults(self):
        args = yard.build_parser().parse_args([])
        self.assertEqual(args.expressions, [])
        self.assertFalse(args.rpn)
        self.assertFalse(args.quiet)
        self.assertFalse(args.verbose)


if __name__ == "__main__":
    unittest.main()
