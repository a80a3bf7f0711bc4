"""Command-line argument parsing."""

import argparse
from typing import List, Optional


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """コマンドライン引数をパースする

    Args:
        argv: 引数リスト（指定しない場合は sys.argv を使用）

    Returns:
        パース済み引数
    """
    parser = argparse.ArgumentParser(description="configtree - 階層設定ファイルの参照・検索ツール")

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="設定ファイルのパス（デフォルト: config.yaml）",
    )

    parser.add_argument("--debug", action="store_true", help="デバッグモードで実行（詳細ログ）")

    parser.add_argument(
        "--env-prefix",
        type=str,
        default="CONFIGTREE_",
        help="設定を上書きする環境変数のプレフィックス（デフォルト: CONFIGTREE_）",
    )

    parser.add_argument("--default", type=str, help="--get でキーが存在しない場合に返す値")

    action = parser.add_mutually_exclusive_group()
    action.add_argument("--get", type=str, metavar="KEY", help="ドット記法のキーで値を取得")
    action.add_argument("--node", type=str, metavar="KEY", help="ノードを入れ子のまま取得")
    action.add_argument("--query", type=str, metavar="GLOB", help="ワイルドカード（*）でキーを検索")
    action.add_argument("--search", type=str, metavar="REGEX", help="デリミタ付き正規表現（例: /db/i）でキーを検索")
    action.add_argument(
        "--filter-keys", type=str, metavar="REGEX", help="正規表現の最初のキャプチャグループの値を一覧表示"
    )

    return parser.parse_args(argv)
