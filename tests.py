#!/usr/bin/env python

import io
from contextlib import redirect_stderr
from unittest import TestCase, main

import pandas as pd
from pandas.testing import assert_series_equal

import margin_tools as mgt
import margin_pandas_tools as mpt


class TrimMarginTest(TestCase):

    def test_empty_string(self):
        self.assertEqual(mgt.trim_margin(""), "")

    def test_single_line_is_not_modified(self):
        for prefix in ["|", "#", "", "abc"]:
            with self.subTest(prefix=prefix):
                self.assertEqual(mgt.trim_margin_with("  hello, world  ", prefix), "  hello, world  ")

    def test_single_line_with_other_type_prefix(self):
        # prefix 는 변환조차 하지 않는다.
        for prefix in [b"|", b"\xff"]:
            with self.subTest(prefix=prefix):
                self.assertEqual(mgt.trim_margin_with("hello", prefix), "hello")
        for prefix in ["|", "\udcff"]:
            with self.subTest(prefix=prefix):
                self.assertEqual(mgt.trim_margin_with(b"x", prefix), b"x")

    def test_unconvertible_prefix(self):
        self.assertIsNone(mgt.trim_margin_with("|a\n|b", b"\xff"))
        self.assertIsNone(mgt.trim_margin_with(b"|a\n|b", "\udcff"))
        self.assertEqual(mgt.trim_margin_with("\n  ", b"\xff"), "")

    def test_byte_like_text(self):
        self.assertEqual(mgt.trim_margin(bytearray(b"|a\n|b")), b"a\nb")
        self.assertEqual(mgt.trim_margin(memoryview(b"\n  |a\n  |b\n")), b"a\nb")
        self.assertEqual(mgt.trim_margin_with(b"#a\n#b", bytearray(b"#")), b"a\nb")
        self.assertIsNone(mgt.trim_margin(bytearray(b"|a\nb")))

    def test_trim_margin(self):
        in_str = """|this
                   |  is a
                   |  multiline string
                   |with margin"""
        actual = mgt.trim_margin(in_str)
        expected = "this\n  is a\n  multiline string\nwith margin"
        self.assertEqual(actual, expected)

    def test_remove_blank_first_and_last_line(self):
        in_str = """
            |ignore blank
            |surrounding lines
        """
        self.assertEqual(mgt.trim_margin(in_str), "ignore blank\nsurrounding lines")

    def test_arbitrary_margin_prefix(self):
        in_str = """
            #ignore blank
            #surrounding lines
        """
        self.assertEqual(mgt.trim_margin_with(in_str, "#"), "ignore blank\nsurrounding lines")
        self.assertIsNone(mgt.trim_margin(in_str))

    def test_multi_character_prefix(self):
        in_str = "\n  >> a\n  >>b\n"
        self.assertEqual(mgt.trim_margin_with(in_str, ">>"), " a\nb")

    def test_line_without_prefix(self):
        self.assertIsNone(mgt.trim_margin("|ok\nnot-prefixed\n|ok2"))

    def test_interior_blank_line_needs_prefix(self):
        self.assertIsNone(mgt.trim_margin("|a\n   \n|b"))
        self.assertEqual(mgt.trim_margin("|a\n   |\n|b"), "a\n\nb")

    def test_only_one_boundary_line_is_dropped(self):
        self.assertIsNone(mgt.trim_margin("\n\n|a\n|b"))
        self.assertIsNone(mgt.trim_margin("|a\n|b\n\n"))

    def test_blank_last_line_not_checked(self):
        self.assertEqual(mgt.trim_margin("|a\n \t "), "a")

    def test_trailing_whitespace_is_kept(self):
        in_str = """a b
                   |c d 
                   |e f """
        self.assertIsNone(mgt.trim_margin(in_str))
        self.assertEqual(mgt.trim_margin("|a b \n\t|c d\t"), "a b \nc d\t")

    def test_prefix_is_case_sensitive(self):
        self.assertIsNone(mgt.trim_margin_with("x1\nX2", "x"))

    def test_empty_prefix(self):
        self.assertEqual(mgt.trim_margin_with("\n   a \n\tb\n  ", ""), "a \nb")

    def test_only_newlines(self):
        self.assertEqual(mgt.trim_margin("\n"), "")
        self.assertEqual(mgt.trim_margin(" \n "), "")

    def test_synthetic_margin(self):
        cases = [["a", "b"], ["  x", "", "y  "], ["héllo", "wörld", "漢字"]]
        for lines in cases:
            with self.subTest(lines=lines):
                text = "\n".join("|" + l for l in lines)
                expected = "\n".join(lines)
                self.assertEqual(mgt.trim_margin(text), expected)
                self.assertEqual(mgt.trim_margin("\n  " + text + "\n   "), expected)

    def test_multibyte_prefix(self):
        self.assertEqual(mgt.trim_margin_with("→a\n  →b", "→"), "a\nb")

    def test_bytes(self):
        in_bytes = b"\n    |one\n    | two\n  "
        self.assertEqual(mgt.trim_margin(in_bytes), b"one\n two")
        self.assertEqual(mgt.trim_margin_with(in_bytes, b"|"), b"one\n two")
        self.assertEqual(mgt.trim_margin_with("\n  |a\n  |b".encode("utf-8"), "|"), b"a\nb")
        self.assertEqual(mgt.trim_margin_with("→a\n→b".encode("utf-8"), "→"), b"a\nb")
        self.assertIsNone(mgt.trim_margin(b"|a\nb"))

    def test_non_string_text(self):
        self.assertEqual(mgt.trim_margin(12), "12")

    def test_input_is_not_mutated(self):
        in_str = "\n |a\n |b\n"
        mgt.trim_margin(in_str)
        self.assertEqual(in_str, "\n |a\n |b\n")


class FindMarginViolationTest(TestCase):

    def test_no_violation(self):
        self.assertIsNone(mgt.find_margin_violation("single line"))
        self.assertIsNone(mgt.find_margin_violation("\n |a\n |b\n"))

    def test_line_number_of_violation(self):
        self.assertEqual(mgt.find_margin_violation("|ok\nnot-prefixed\n|ok2"), 2)
        self.assertEqual(mgt.find_margin_violation("\n  |a\n  |b\n  c\n"), 4)
        self.assertEqual(mgt.find_margin_violation("a\n|b"), 1)

    def test_agrees_with_trim_margin(self):
        texts = ["", "x", "|a\n|b", "\n|a\n", "|a\n\n|b", "\n\n|a", "#a\n#b"]
        texts += [t.encode("utf-8") for t in texts]
        for text in texts:
            for prefix in ["|", "#", b"|", b"\xff", "\udcff"]:
                with self.subTest(text=text, prefix=prefix):
                    failed = mgt.trim_margin_with(text, prefix) is None
                    self.assertEqual(failed, mgt.find_margin_violation(text, prefix) is not None)


class MarginPandasToolsTest(TestCase):

    def setUp(self):
        self.S = pd.Series(["\n  |a\n  |b\n", "single", "|ok\nbad\n|ok2", None],
                           index=[10, 11, 12, 13], name="txt")
        self.A = pd.DataFrame({"txt": self.S, "n": [1, 2, 3, 4]})

    def test_accessor_trim(self):
        T = self.S.margin.trim()
        self.assertEqual(T.name, "txt")
        self.assertEqual(T.index.tolist(), [10, 11, 12, 13])
        self.assertEqual(T[10], "a\nb")
        self.assertEqual(T[11], "single")
        self.assertEqual(T.isna().tolist(), [False, False, True, True])

    def test_accessor_custom_prefix(self):
        S = pd.Series(["\n  #a\n  #b\n", "|a\n|b"])
        T = S.margin.trim("#")
        self.assertEqual(T[0], "a\nb")
        self.assertIsNone(T[1])

    def test_accessor_is_valid(self):
        expected = pd.Series([True, True, False, False], index=[10, 11, 12, 13], name="txt")
        assert_series_equal(self.S.margin.is_valid(), expected)

    def test_accessor_violations(self):
        expected = pd.Series([pd.NA, pd.NA, 2, pd.NA], index=[10, 11, 12, 13], name="txt", dtype="Int64")
        assert_series_equal(self.S.margin.violations(), expected)

    def test_report_margin_violations(self):
        R = mpt.report_margin_violations(self.A, "txt")
        self.assertEqual(R.columns.tolist(), ["txt", "line"])
        self.assertEqual(R.index.tolist(), [12])
        self.assertEqual(R["line"].tolist(), [2])

    def test_trim_margin_column(self):
        B = mpt.trim_margin_column(self.A, "txt")
        self.assertEqual(B.columns.tolist(), ["txt", "n"])
        self.assertEqual(B.loc[10, "txt"], "a\nb")
        self.assertTrue(pd.isna(B.loc[12, "txt"]))
        # source DataFrame is left as is
        self.assertEqual(self.A.loc[10, "txt"], "\n  |a\n  |b\n")

    def test_trim_margin_column_with_name(self):
        B = mpt.trim_margin_column(self.A, "txt", name="trimmed")
        self.assertEqual(B.columns.tolist(), ["txt", "n", "trimmed"])
        self.assertEqual(B.loc[10, "trimmed"], "a\nb")

    def test_trim_margin_column_raise(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(ValueError):
            mpt.trim_margin_column(self.A, "txt", errors="raise")
        self.assertIn("index=12, line=2", err.getvalue())

        ok = self.A.drop(12)
        B = mpt.trim_margin_column(ok, "txt", errors="raise")
        self.assertEqual(B.loc[10, "txt"], "a\nb")

    def test_trim_margin_column_bad_errors(self):
        with self.assertRaises(ValueError):
            mpt.trim_margin_column(self.A, "txt", errors="ignore")


if __name__ == '__main__':
    main()
