"""forwardgen.core.engine: 仕様の読み込み・正規化・検証"""
