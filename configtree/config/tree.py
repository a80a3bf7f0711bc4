"""Helpers for walking nested configuration dictionaries."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from configtree.config.errors import InvalidArgumentError

SEPARATOR = "."


def split_key(key: str) -> List[str]:
    """ドット区切りのキーをセグメントに分割する

    Args:
        key: 設定キー（例: 'database.host'）

    Returns:
        セグメントのリスト

    Raises:
        InvalidArgumentError: キーが空、または空のセグメントを含む場合
    """
    if not isinstance(key, str) or not key:
        raise InvalidArgumentError("設定キーは空でない文字列である必要があります。")

    parts = key.split(SEPARATOR)
    if any(part == "" for part in parts):
        raise InvalidArgumentError(f"設定キー '{key}' に空のセグメントが含まれています。")

    return parts


def is_branch(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_scalar(value: Any) -> bool:
    """文字列・数値・ブール値ならTrue（Noneは含まない）"""
    return isinstance(value, (str, int, float, bool))


def copy_tree(tree: Mapping[str, Any]) -> Dict[str, Any]:
    """辞書部分だけを再帰的にコピーする

    葉の値は同一オブジェクトのまま保持する。
    """
    return {str(k): copy_tree(v) if is_branch(v) else v for k, v in tree.items()}


def flatten_tree(tree: Mapping[str, Any], prefix: Optional[str] = None) -> Dict[str, Any]:
    """ネストした辞書をドット区切りキーの辞書に平坦化する

    葉ごとに 'p1.p2.pn' 形式のキーを1つ出力し、辞書ノード自体は出力しない。
    空の辞書は何も出力しない。

    Args:
        tree: 平坦化する辞書（サブツリーでも可）
        prefix: キーの先頭に付けるパス

    Returns:
        平坦化された辞書
    """
    flat: Dict[str, Any] = {}

    for key, value in tree.items():
        path = str(key) if prefix is None else f"{prefix}{SEPARATOR}{key}"

        if is_branch(value):
            flat.update(flatten_tree(value, path))
            continue

        flat[path] = value

    return flat
