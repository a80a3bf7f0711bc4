#!/usr/bin/env python
"""
configtree - メインエントリーポイント

YAML/JSON 設定ファイルを階層設定コンテナに読み込み、
ドット記法のキー取得、ワイルドカード検索、正規表現検索の結果を
JSON として標準出力に書き出します。
"""

import json
import logging
import sys

from configtree.cli import parse_arguments
from configtree.config import ConfigContainer, apply_env_overrides, load_config_file
from configtree.utils import setup_logging


def main(argv=None):
    """メイン処理"""
    # コマンドライン引数のパース
    args = parse_arguments(argv)

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    try:
        # 設定ファイルの読み込み
        logger.info(f"設定ファイルを読み込んでいます: {args.config}")
        config = ConfigContainer(load_config_file(args.config))

        # 環境変数による上書き
        apply_env_overrides(config, args.env_prefix)

        if args.get is not None:
            result = config.get(args.get, args.default)
        elif args.node is not None:
            result = config.get_node(args.node)
        elif args.query is not None:
            result = config.query(args.query)
        elif args.search is not None:
            result = config.search(args.search)
        elif args.filter_keys is not None:
            result = config.filter_keys(args.filter_keys)
        else:
            result = config.flatten()

        print(json.dumps(result, ensure_ascii=False, indent=2, default=str))
        return 0

    except FileNotFoundError as e:
        logger.error(f"ファイルが見つかりません: {e}")
        return 1
    except ValueError as e:
        logger.error(f"設定エラー: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("処理が中断されました")
        return 130


if __name__ == "__main__":
    sys.exit(main())
