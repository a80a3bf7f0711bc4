"""Hierarchical configuration container addressed by dotted keys."""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from configtree.config.environment import read_env
from configtree.config.errors import InvalidArgumentError, NotFoundError, ScalarOptionError
from configtree.config.patterns import compile_delimited, glob_to_regex
from configtree.config.runtime import ScalarOptionSink, runtime_settings, to_option_string
from configtree.config.tree import copy_tree, flatten_tree, is_branch, is_scalar, split_key

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigContainer:
    """階層設定コンテナ

    ドット記法（例: 'database.host'）で入れ子の辞書にアクセスする。
    書き込み時は途中のノードを自動生成し、読み込み時は存在しないキーに対して
    デフォルト値を返す。

    Attributes:
        config: 設定データ（入れ子の辞書）
        settings: スカラー値の反映先となるランタイム設定
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, Any]] = None,
        settings: Optional[ScalarOptionSink] = None,
    ):
        """ConfigContainerを初期化する

        Args:
            initial: 初期設定（set_from_dict と同じくマージとして適用される）
            settings: ランタイム設定（デフォルト: プロセス共有の runtime_settings）
        """
        self.config: Dict[str, Any] = {}
        self.settings = settings if settings is not None else runtime_settings

        if initial:
            self.set_from_dict(initial)

    def set(self, key: str, value: Any) -> Any:
        """設定値を変更する

        途中のノードが存在しない、または葉である場合は空のノードに置き換える。
        最後のセグメントは既存のサブツリーごと置き換えられる。
        辞書の値は平坦化し、ドットを含むキーも階層として設定する。

        Args:
            key: 設定キー（ドット記法をサポート）
            value: 設定する値

        Returns:
            設定した値

        Raises:
            InvalidArgumentError: キーが空、または空のセグメントを含む場合
                （辞書の値に含まれるキーも対象）
        """
        keys = split_key(key)

        if is_branch(value):
            # 書き込み前にすべてのキーを検証する
            entries = {f"{key}.{sub_key}": sub_value for sub_key, sub_value in flatten_tree(value).items()}
            for sub_key in entries:
                split_key(sub_key)

            self._assign(keys, {})
            for sub_key, sub_value in entries.items():
                self.set(sub_key, sub_value)

            logger.debug(f"設定ノードを変更しました: {key} ({len(entries)} 件)")
            return value

        self._assign(keys, value)
        logger.debug(f"設定値を変更しました: {key} = {value!r}")
        return value

    def _assign(self, keys: List[str], value: Any) -> None:
        config = self.config

        for k in keys[:-1]:
            child = config.get(k)
            if not is_branch(child):
                child = {}
                config[k] = child
            config = child

        config[keys[-1]] = value

    def set_from_dict(self, values: Mapping[str, Any]) -> None:
        """入れ子の辞書を平坦化して1キーずつ設定する

        既存の兄弟キーは保持される（置き換えではなくマージ）。
        """
        for key, value in flatten_tree(values).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """設定値を取得する

        Args:
            key: 設定キー（ドット記法をサポート）
            default: キーが存在しない場合のデフォルト値

        Returns:
            設定値（ノードの場合は辞書のコピー）、またはデフォルト値
        """
        value = self._lookup(key)
        if value is _MISSING:
            return default
        return copy_tree(value) if is_branch(value) else value

    def get_node(self, key: Optional[str] = None) -> Any:
        """ノードを取得する

        key を省略した場合は設定全体を返す。存在しない場合は None を返す。
        """
        if key is None:
            return copy_tree(self.config)
        return self.get(key)

    def has(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def require(self, key: str) -> Any:
        """設定値を取得する（存在しない場合は例外）

        Raises:
            NotFoundError: キーが存在しない場合
        """
        value = self._lookup(key)
        if value is _MISSING:
            raise NotFoundError(f"設定キー '{key}' は存在しません。")
        return copy_tree(value) if is_branch(value) else value

    def flatten(self, key: Optional[str] = None) -> Dict[str, Any]:
        """設定全体またはサブツリーをドット区切りキーの辞書に平坦化する

        キーはサブツリーからの相対パスになる。ノードでない場合は空の辞書を返す。
        """
        node = self.config if key is None else self._lookup(key)
        if not is_branch(node):
            return {}
        return flatten_tree(node)

    def query(self, pattern: str) -> Dict[str, Any]:
        """ワイルドカードでキーを検索する

        '*' が任意の文字列に一致する。大文字小文字は区別せず、キー全体と照合する。

        Args:
            pattern: ワイルドカードパターン（例: '*.host'）

        Returns:
            一致したキーと値の辞書
        """
        regex = glob_to_regex(pattern)
        return {k: v for k, v in flatten_tree(self.config).items() if regex.fullmatch(k)}

    def search(self, pattern: str) -> Dict[str, Any]:
        """正規表現でキーを検索する

        Args:
            pattern: デリミタ付きの正規表現（例: '/nested/i'）

        Returns:
            一致したキーと値の辞書

        Raises:
            InvalidArgumentError: パターンが不正な場合
        """
        regex = compile_delimited(pattern)
        return {k: v for k, v in flatten_tree(self.config).items() if regex.search(k)}

    def filter_keys(self, pattern: str) -> List[str]:
        """正規表現の最初のキャプチャグループの値を重複なしで返す

        キャプチャグループに一致しなかったキーはスキップする。

        Raises:
            InvalidArgumentError: パターンが不正な場合
        """
        regex = compile_delimited(pattern)
        found: Dict[str, None] = {}

        if regex.groups < 1:
            return []

        for key in flatten_tree(self.config):
            match = regex.search(key)
            if match is None or match.group(1) is None:
                continue
            found.setdefault(match.group(1), None)

        return list(found)

    def set_runtime_options_from_node(self, key: str) -> List[str]:
        """ノード配下のスカラー値をランタイム設定に反映する

        Args:
            key: ノードのキー

        Returns:
            反映したキーのリスト（ノードからの相対パス）

        Raises:
            NotFoundError: ノードが存在しない場合
            ScalarOptionError: ランタイム設定への反映に失敗した場合
        """
        node = self._lookup(key)
        if not is_branch(node):
            raise NotFoundError(f"設定ノード '{key}' は存在しません。")
        return self._apply_runtime_options(flatten_tree(node))

    def set_runtime_options_from_config(self, values: Mapping[str, Any]) -> List[str]:
        """入れ子の辞書のスカラー値をランタイム設定に反映する

        Raises:
            ScalarOptionError: ランタイム設定への反映に失敗した場合
        """
        return self._apply_runtime_options(flatten_tree(values))

    @staticmethod
    def env(key: str, default: Any = None, environ: Optional[Mapping[str, str]] = None) -> Any:
        """環境変数を取得する（'true'/'false' はブール値に変換）"""
        return read_env(key, default, environ)

    def to_dict(self) -> Dict[str, Any]:
        return copy_tree(self.config)

    def _lookup(self, key: str) -> Any:
        try:
            keys = split_key(key)
        except InvalidArgumentError:
            return _MISSING

        value: Any = self.config
        for k in keys:
            if is_branch(value) and k in value:
                value = value[k]
            else:
                return _MISSING

        return value

    def _apply_runtime_options(self, flat: Mapping[str, Any]) -> List[str]:
        # 途中で失敗しても、それまでに反映したキーは元に戻さない
        applied = []
        for key, value in flat.items():
            if not is_scalar(value):
                logger.debug(f"スカラー値ではないためスキップします: {key}")
                continue

            try:
                self.settings.set_scalar_option(key, to_option_string(value))
            except ScalarOptionError as e:
                logger.warning(str(e))
                raise
            except Exception as e:
                logger.warning(f"ランタイム設定 '{key}' の反映に失敗しました: {e}")
                raise ScalarOptionError(key, str(e)) from e

            applied.append(key)

        logger.info(f"ランタイム設定に {len(applied)} 件を反映しました。")
        return applied

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.require(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __len__(self) -> int:
        return len(flatten_tree(self.config))

    def __iter__(self) -> Iterator[str]:
        return iter(flatten_tree(self.config))
