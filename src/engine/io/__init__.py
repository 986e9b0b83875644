"""
どこで: `engine.io` サブパッケージ。
何を: 外部リソース（画像テクスチャ）の非同期読み込み。
なぜ: ファイル I/O とデコードを描画ループから切り離すため。
"""

from .textures import TextureProvider, read_image

__all__ = ["TextureProvider", "read_image"]
