"""Exception types raised by the configuration containers."""

from __future__ import annotations


class ConfigError(Exception):
    """設定コンテナ関連の例外の基底クラス"""


class NotFoundError(ConfigError, KeyError):
    """指定されたキーまたはノードが存在しない場合の例外"""

    def __str__(self) -> str:
        # KeyError は repr() を返すので、メッセージをそのまま表示する
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(ConfigError, ValueError):
    """キーやパターンなどの引数が不正な場合の例外"""


class ScalarOptionError(ConfigError, RuntimeError):
    """ランタイム設定への値の反映に失敗した場合の例外

    Attributes:
        key: 反映に失敗したオプションキー
    """

    def __init__(self, key: str, message: str):
        super().__init__(f"ランタイム設定 '{key}' の反映に失敗しました: {message}")
        self.key = key
