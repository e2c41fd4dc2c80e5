#!/usr/bin/env python

DEFAULT_MARGIN_PREFIX = "|"


def _as_text(text):
    if isinstance(text, (str, bytes)):
        return text
    if isinstance(text, (bytearray, memoryview)):
        return bytes(text)
    return str(text)


def _same_unit_prefix(text, margin_prefix):
    """text 와 같은 타입의 prefix 를 반환한다. 변환할 수 없으면 None

    prefix 길이는 text 와 같은 단위(str: code point, bytes: byte)로 잘라야 한다.
    """
    if isinstance(margin_prefix, (bytearray, memoryview)):
        margin_prefix = bytes(margin_prefix)
    try:
        if isinstance(text, bytes) and isinstance(margin_prefix, str):
            return margin_prefix.encode("utf-8")
        if isinstance(text, str) and isinstance(margin_prefix, bytes):
            return margin_prefix.decode("utf-8")
    except UnicodeError:
        return None
    return margin_prefix


def _walk_margin(text, margin_prefix):
    """margin 을 제거한 결과와 규칙을 어긴 줄 번호를 (trimmed, lineno) 로 반환한다.

    둘 중 하나는 항상 None 이다. lineno 는 원래 text 기준 1부터 시작한다.
    """
    text = _as_text(text)
    newline = b"\n" if isinstance(text, bytes) else "\n"

    lines = [line.lstrip() for line in text.split(newline)]
    if len(lines) <= 1:
        return text, None

    # 변환할 수 없는 prefix 는 어떤 줄과도 일치하지 않는다.
    margin_prefix = _same_unit_prefix(text, margin_prefix)
    start = 0 if lines[0] else 1
    last = len(lines) - 1
    trimmed = []
    for i in range(start, len(lines)):
        line = lines[i]
        if i == last and not line:
            continue
        if margin_prefix is None or not line.startswith(margin_prefix):
            return None, i + 1
        trimmed.append(line[len(margin_prefix):])
    return newline.join(trimmed), None


def trim_margin_with(text, margin_prefix):
    """여러 줄 문자열에서 margin 을 제거한 문자열을 반환한다.

    첫 줄과 마지막 줄이 공백뿐이면 버리고, 나머지 각 줄의 앞쪽 공백과
    margin_prefix 를 제거한다. 줄 끝의 공백은 그대로 둔다.

    Parameters
    ----------
    text : str or bytes
        * bytearray, memoryview 는 bytes 로 변환한다.
        * str, bytes 가 아닌 나머지 값은 str() 로 변환한다.
    margin_prefix : str or bytes, 빈 문자열이면 모든 줄이 일치한다.

    Returns
    -------
    trimmed : str or bytes or None
        * 줄바꿈이 없으면 text 를 그대로 돌려준다.
        * margin_prefix 로 시작하지 않는 줄이 하나라도 있으면 None
    """
    trimmed, _ = _walk_margin(text, margin_prefix)
    return trimmed


def trim_margin(text):
    return trim_margin_with(text, DEFAULT_MARGIN_PREFIX)


def find_margin_violation(text, margin_prefix=DEFAULT_MARGIN_PREFIX):
    """trim_margin_with 가 실패하게 만드는 첫 줄의 번호(1부터)를 반환한다. 문제가 없으면 None"""
    _, lineno = _walk_margin(text, margin_prefix)
    return lineno
