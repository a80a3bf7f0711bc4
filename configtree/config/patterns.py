"""Translation of glob queries and delimiter-wrapped regular expressions."""

from __future__ import annotations

import re
from typing import Pattern

from configtree.config.errors import InvalidArgumentError

# 括弧系デリミタは対応する閉じ括弧で終わる
BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}

PATTERN_MODIFIERS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


def glob_to_regex(glob: str) -> Pattern[str]:
    """ワイルドカードパターンを正規表現に変換する

    '*' は任意の文字列に一致し、それ以外の文字はリテラルとして扱う。
    大文字小文字は区別しない。戻り値は fullmatch() で使用すること。

    Args:
        glob: ワイルドカードパターン（例: 'database.*'）

    Returns:
        コンパイル済みの正規表現
    """
    body = ".*?".join(re.escape(part) for part in glob.split("*"))
    return re.compile(f"^{body}$", re.IGNORECASE)


def compile_delimited(pattern: str) -> Pattern[str]:
    """デリミタで囲まれた正規表現（例: '/nested/i'）をコンパイルする

    先頭の文字をデリミタとして扱い、エスケープされていない最初の閉じデリミタ以降を
    修飾子とみなす。括弧系デリミタは入れ子を数える。

    Args:
        pattern: デリミタ付きの正規表現

    Returns:
        コンパイル済みの正規表現

    Raises:
        InvalidArgumentError: パターンが空、デリミタが不正、修飾子が未知、
            またはコンパイルに失敗した場合
    """
    if not isinstance(pattern, str):
        raise InvalidArgumentError("正規表現は文字列である必要があります。")

    pattern = pattern.lstrip()
    if not pattern:
        raise InvalidArgumentError("正規表現が空です。")

    delimiter = pattern[0]
    if delimiter.isalnum() or delimiter == "\\":
        raise InvalidArgumentError(
            f"不正なデリミタ '{delimiter}' です。英数字とバックスラッシュは使用できません。"
        )

    closing = BRACKET_DELIMITERS.get(delimiter, delimiter)
    end = _find_closing_delimiter(pattern, delimiter, closing)
    if end < 0:
        raise InvalidArgumentError(f"終了デリミタ '{closing}' が見つかりません: {pattern}")

    body = pattern[1:end]
    flags = 0
    for modifier in pattern[end + 1 :]:
        if modifier not in PATTERN_MODIFIERS:
            raise InvalidArgumentError(f"未知の修飾子 '{modifier}' です: {pattern}")
        flags |= PATTERN_MODIFIERS[modifier]

    try:
        return re.compile(body, flags)
    except re.error as e:
        raise InvalidArgumentError(f"正規表現のコンパイルに失敗しました: {pattern} ({e})") from e


def _find_closing_delimiter(pattern: str, delimiter: str, closing: str) -> int:
    """閉じデリミタの位置を返す（見つからない場合は -1）"""
    depth = 1
    index = 1
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == closing:
            depth -= 1
            if depth == 0:
                return index
        elif char == delimiter:
            depth += 1
        index += 1
    return -1
