"""環境変数の読み取りと設定への上書きを行う簡易リゾルバ。"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from configtree.config.config_container import ConfigContainer

logger = logging.getLogger(__name__)


def parse_env_value(raw: str) -> Any:
    """'true'/'false'（大文字小文字を問わない）をブール値に変換する。"""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw


def read_env(key: str, default: Any = None, environ: Mapping[str, str] | None = None) -> Any:
    """環境変数を読み取る。未設定の場合は default を返す。"""
    source = os.environ if environ is None else environ
    if key not in source:
        return default
    return parse_env_value(source[key])


def apply_env_overrides(
    container: ConfigContainer,
    prefix: str = "CONFIGTREE_",
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """環境変数による上書き。

    PREFIX_DATABASE__HOST=db は 'database.host' に 'db' を設定する。

    Returns:
        上書きしたドット区切りキーのリスト
    """
    source = os.environ if environ is None else environ
    applied = []
    for env_key in sorted(source):
        if not env_key.startswith(prefix):
            continue
        key = env_key[len(prefix) :].lower().replace("__", ".")
        if not key or "" in key.split("."):
            logger.warning(f"環境変数 '{env_key}' は設定キーに変換できないためスキップします。")
            continue
        container.set(key, parse_env_value(source[env_key]))
        applied.append(key)

    if applied:
        logger.info(f"環境変数から {len(applied)} 件の設定を上書きしました。")
    return applied
