"""Process-wide runtime settings that scalar configuration values are projected into."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Union

from configtree.config.errors import NotFoundError, ScalarOptionError

logger = logging.getLogger(__name__)

ScalarValue = Union[str, int, float, bool]


class ScalarOptionSink(Protocol):
    """スカラー値を受け取るランタイム設定ポート。"""

    def set_scalar_option(self, key: str, value: ScalarValue) -> Any:
        """オプションを設定する。失敗時は例外を送出する。"""


class RuntimeSettings:
    """ランタイム設定レジストリ

    値は常に文字列として保持する。

    Attributes:
        strict: Trueの場合、defaults に無いキーの設定を拒否する
        readonly: 変更できないキーの集合
    """

    def __init__(
        self,
        defaults: Optional[Mapping[str, ScalarValue]] = None,
        strict: bool = False,
        readonly: Iterable[str] = (),
    ):
        self._defaults: Dict[str, str] = {k: to_option_string(v) for k, v in (defaults or {}).items()}
        self._options: Dict[str, str] = dict(self._defaults)
        self.strict = strict
        self.readonly = frozenset(readonly)

    def set_scalar_option(self, key: str, value: ScalarValue) -> Optional[str]:
        """オプションを設定し、変更前の値を返す

        Raises:
            ScalarOptionError: 未知のキー（strict時）、読み取り専用キー、
                またはスカラー以外の値が指定された場合
        """
        if self.strict and key not in self._defaults:
            raise ScalarOptionError(key, "未知のオプションです")
        if key in self.readonly:
            raise ScalarOptionError(key, "読み取り専用のオプションです")
        if not isinstance(value, (str, int, float, bool)):
            raise ScalarOptionError(key, f"スカラー値ではありません: {type(value).__name__}")

        previous = self._options.get(key)
        self._options[key] = to_option_string(value)
        logger.debug(f"ランタイム設定を変更しました: {key} = {self._options[key]}")
        return previous

    def get_scalar_option(self, key: str) -> str:
        if key not in self._options:
            raise NotFoundError(f"ランタイム設定 '{key}' は存在しません。")
        return self._options[key]

    def restore(self, key: str) -> None:
        """オプションを初期値に戻す（初期値が無いキーは削除する）"""
        if key in self._defaults:
            self._options[key] = self._defaults[key]
        else:
            self._options.pop(key, None)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._options)


def to_option_string(value: ScalarValue) -> str:
    # bool は int のサブクラスなので先に判定する
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


# プロセス全体で共有されるランタイム設定
runtime_settings = RuntimeSettings()
