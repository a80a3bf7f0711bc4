"""Test cases for runtime settings and scalar option projection."""

from __future__ import annotations

import pytest

from configtree.config import (
    ConfigContainer,
    NotFoundError,
    RuntimeSettings,
    ScalarOptionError,
    runtime_settings,
)


class RejectingSink:
    """指定したキーで失敗するテスト用シンク"""

    def __init__(self, reject: str):
        self.reject = reject
        self.calls = []

    def set_scalar_option(self, key, value):
        if key == self.reject:
            raise ValueError("rejected")
        self.calls.append((key, value))


def test_set_and_get_scalar_option(settings: RuntimeSettings):
    """値は文字列として保持され、変更前の値が返される"""
    assert settings.set_scalar_option("memory_limit", 128) is None
    assert settings.get_scalar_option("memory_limit") == "128"
    assert settings.set_scalar_option("memory_limit", "256M") == "128"
    assert settings.get_scalar_option("memory_limit") == "256M"


def test_bool_option_is_stringified(settings: RuntimeSettings):
    """ブール値は '1'/'0' に変換される"""
    settings.set_scalar_option("display_errors", True)
    settings.set_scalar_option("log_errors", False)

    assert settings.as_dict() == {"display_errors": "1", "log_errors": "0"}


def test_get_unknown_option_raises(settings: RuntimeSettings):
    """存在しないオプションは NotFoundError"""
    with pytest.raises(NotFoundError):
        settings.get_scalar_option("missing")


def test_strict_settings_reject_unknown_keys():
    """strict の場合は既知のキーのみ設定できる"""
    settings = RuntimeSettings(defaults={"precision": 14}, strict=True)

    settings.set_scalar_option("precision", 10)
    assert settings.get_scalar_option("precision") == "10"

    with pytest.raises(ScalarOptionError) as exc_info:
        settings.set_scalar_option("unknown", 1)
    assert exc_info.value.key == "unknown"


def test_readonly_and_non_scalar_rejected(settings: RuntimeSettings):
    """読み取り専用キーとスカラー以外の値は拒否される"""
    locked = RuntimeSettings(readonly=["safe_mode"])
    with pytest.raises(ScalarOptionError):
        locked.set_scalar_option("safe_mode", "1")
    with pytest.raises(ScalarOptionError):
        settings.set_scalar_option("list", [1, 2])


def test_restore():
    """restore で初期値に戻る"""
    settings = RuntimeSettings(defaults={"precision": 14})
    settings.set_scalar_option("precision", 10)
    settings.set_scalar_option("extra", "x")

    settings.restore("precision")
    settings.restore("extra")

    assert settings.as_dict() == {"precision": "14"}


def test_default_sink_is_process_wide():
    """sink を指定しない場合は共有の runtime_settings を使う"""
    assert ConfigContainer().settings is runtime_settings


def test_set_runtime_options_from_node(settings: RuntimeSettings):
    """ノード配下のスカラー値のみが相対キーで反映される"""
    config = ConfigContainer(
        {
            "php": {
                "display_errors": True,
                "memory_limit": "128M",
                "precision": 14,
                "session": {"name": "SID"},
                "list": [1, 2],
                "null": None,
            },
            "app": {"name": "demo"},
        },
        settings=settings,
    )

    applied = config.set_runtime_options_from_node("php")

    assert applied == ["display_errors", "memory_limit", "precision", "session.name"]
    assert settings.as_dict() == {
        "display_errors": "1",
        "memory_limit": "128M",
        "precision": "14",
        "session.name": "SID",
    }


def test_set_runtime_options_from_missing_node(settings: RuntimeSettings):
    """存在しないノードや葉を指定すると NotFoundError"""
    config = ConfigContainer({"leaf": 1}, settings=settings)

    with pytest.raises(NotFoundError):
        config.set_runtime_options_from_node("missing")
    with pytest.raises(NotFoundError):
        config.set_runtime_options_from_node("leaf")


def test_set_runtime_options_from_config(settings: RuntimeSettings):
    """任意の辞書からも反映できる"""
    config = ConfigContainer(settings=settings)

    applied = config.set_runtime_options_from_config({"date": {"timezone": "UTC"}, "obj": object()})

    assert applied == ["date.timezone"]
    assert settings.get_scalar_option("date.timezone") == "UTC"
    assert config.get_node() == {}


def test_projection_aborts_on_first_failure():
    """失敗したキーで中断し、それまでの反映は残る"""
    sink = RejectingSink(reject="b")
    config = ConfigContainer(settings=sink)

    with pytest.raises(ScalarOptionError, match="rejected") as exc_info:
        config.set_runtime_options_from_config({"a": 1, "b": 2, "c": 3})

    assert exc_info.value.key == "b"
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert sink.calls == [("a", "1")]


def test_projection_propagates_scalar_option_error():
    """シンクの ScalarOptionError はそのまま伝播する"""
    settings = RuntimeSettings(strict=True)
    config = ConfigContainer({"x": {"y": 1}}, settings=settings)

    with pytest.raises(ScalarOptionError) as exc_info:
        config.set_runtime_options_from_node("x")

    assert exc_info.value.key == "y"
