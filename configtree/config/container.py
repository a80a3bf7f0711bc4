"""Minimal key/value container with strict lookups."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from configtree.config.errors import NotFoundError


class Container:
    """フラットなキー/値コンテナ

    キーの階層構造は扱わない（'a.b' も単なる1つのキー）。
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._items: Dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any:
        """値を取得する

        Raises:
            NotFoundError: キーが存在しない場合
        """
        if key not in self._items:
            raise NotFoundError(f"コンテナにキー '{key}' は存在しません。")
        return self._items[key]

    def has(self, key: str) -> bool:
        return key in self._items

    def set(self, key: str, value: Any) -> Any:
        self._items[key] = value
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
