"""
どこで: `util.constants`。
何を: 描画/ウィンドウで共有する定数。
"""

# LINE_STRIP の区切りに使う IBO 値（uint32 の最大値）
PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

DEFAULT_WINDOW_SIZE = (1280, 720)
DEFAULT_FPS = 60
