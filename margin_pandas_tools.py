#!/usr/bin/env python

import sys

import pandas as pd

import margin_tools as mgt


def _is_missing(x):
    return pd.api.types.is_scalar(x) and pd.isna(x)


###############################################################################
# Series accessor
###############################################################################

@pd.api.extensions.register_series_accessor("margin")
class MarginAccessor:
    """Series 의 문자열 값마다 margin 처리를 적용한다.

    ex) df["query"].margin.trim()
        df["query"].margin.trim("#")
    """

    def __init__(self, series):
        self._obj = series

    def _map(self, f):
        return self._obj.map(lambda x: None if _is_missing(x) else f(x))

    def trim(self, margin_prefix=mgt.DEFAULT_MARGIN_PREFIX):
        """margin 을 제거한 Series. 실패한 값과 결측값은 None 이 된다."""
        return self._map(lambda x: mgt.trim_margin_with(x, margin_prefix))

    def is_valid(self, margin_prefix=mgt.DEFAULT_MARGIN_PREFIX):
        return self._obj.map(
            lambda x: not _is_missing(x) and mgt.find_margin_violation(x, margin_prefix) is None
        ).astype(bool)

    def violations(self, margin_prefix=mgt.DEFAULT_MARGIN_PREFIX):
        return self._map(lambda x: mgt.find_margin_violation(x, margin_prefix)).astype("Int64")


###############################################################################
# DataFrame
###############################################################################

def report_margin_violations(A, col, margin_prefix=mgt.DEFAULT_MARGIN_PREFIX):
    """margin 규칙을 어긴 row 만 모은 DataFrame 을 반환한다.

    Parameters
    ----------
    A : DataFrame
    col : str, 검사할 column
    margin_prefix : str

    Returns
    -------
    df : DataFrame, columns = [col, "line"], index 는 A 의 index 를 유지한다.
    """
    lines = A[col].margin.violations(margin_prefix)
    mask = lines.notna()
    R = A.loc[mask, [col]].copy()
    R["line"] = lines[mask]
    return R


def trim_margin_column(A, col, margin_prefix=mgt.DEFAULT_MARGIN_PREFIX, name=None, errors="coerce"):
    """col 의 margin 을 제거한 DataFrame 을 반환한다.

    Parameters
    ----------
    A : DataFrame
    col : str, source column name
    margin_prefix : str
    name : str, default None
        * None 이면 col 을 덮어쓴다.
    errors : {"coerce", "raise"}
        * coerce : 실패한 값은 None 으로 둔다.
        * raise : 실패한 row 를 stderr 에 쓰고 ValueError 를 발생시킨다.

    Returns
    -------
    df : DataFrame
    """
    if errors not in ("coerce", "raise"):
        raise ValueError("errors must be 'coerce' or 'raise', got %r" % (errors,))
    if name is None:
        name = col

    if errors == "raise":
        R = report_margin_violations(A, col, margin_prefix)
        if len(R) > 0:
            sys.stderr.write("margin prefix %r is violated in %d row(s) of column '%s'\n"
                             % (margin_prefix, len(R), col))
            for idx, line in R["line"].items():
                sys.stderr.write("  index=%s, line=%s\n" % (idx, line))
            sys.stderr.write("  => report_margin_violations(A, '%s') for details\n" % col)
            raise ValueError("margin violated")

    A = A.copy()
    A[name] = A[col].margin.trim(margin_prefix)
    return A
