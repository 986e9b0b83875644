"""
どこで: `engine.io.textures`。
何を: 画像ファイルを単一ワーカースレッドでデコードし、主スレッドの `tick()` でハンドルへ束縛する
      `TextureProvider`。
なぜ: シーン構築を画像読み込みで止めないため。`request()` は即座にハンドルを返し、
      画素は後から届く。束縛は主スレッドでのみ行うので描画と競合しない。

失敗（ファイルなし/デコード失敗/キュー満杯/無効化）は警告ログを出してハンドルを `failed` にする。
マテリアルはベース色で描かれ続ける。再試行はしない。
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import Callable

import imageio.v3 as iio
import numpy as np

from ..core.material import TextureHandle
from ..core.tickable import Tickable

logger = logging.getLogger(__name__)

ImageReader = Callable[[Path], np.ndarray]


def read_image(path: Path) -> np.ndarray:
    """imageio で 1 枚の画像を読み、`(H, W[, C])` 配列を返す。"""
    return np.asarray(iio.imread(path))


_STOP = object()


class TextureProvider(Tickable):
    """テクスチャ読み込み用の単一ワーカースレッド。"""

    def __init__(
        self,
        asset_dir: Path | str,
        *,
        queue_size: int = 16,
        enabled: bool = True,
        reader: ImageReader = read_image,
    ) -> None:
        self.asset_dir = Path(asset_dir)
        self.enabled = bool(enabled)
        self._reader = reader
        self._requests: "queue.Queue[object]" = queue.Queue(maxsize=max(1, int(queue_size)))
        self._results: "queue.Queue[tuple[TextureHandle, np.ndarray | None, str | None]]" = (
            queue.Queue()
        )
        self._handles: dict[str, TextureHandle] = {}
        self._lock = threading.Lock()
        self._closed = False
        self._th = threading.Thread(target=self._worker, name="TextureLoader", daemon=True)
        self._th.start()

    # --- public API ---
    def request(self, name: str) -> TextureHandle:
        """`asset_dir/name` の読み込みを予約し、ハンドルを即座に返す。

        同じ名前は同じハンドルを共有する。
        """
        with self._lock:
            handle = self._handles.get(name)
            if handle is not None:
                return handle
            handle = TextureHandle(name)
            self._handles[name] = handle

        if not self.enabled:
            handle.fail("textures disabled")
            return handle
        if self._closed:
            handle.fail("provider closed")
            return handle
        try:
            self._requests.put_nowait((handle, self.asset_dir / name))
        except queue.Full:
            logger.warning("texture queue full; '%s' falls back to base color", name)
            handle.fail("queue full")
        return handle

    def handles(self) -> list[TextureHandle]:
        with self._lock:
            return list(self._handles.values())

    @property
    def pending_count(self) -> int:
        return sum(1 for h in self.handles() if h.state == "pending")

    def tick(self, dt: float) -> None:
        """完了した読み込みをハンドルへ束縛する（主スレッドから呼ぶ）。"""
        while True:
            try:
                handle, pixels, error = self._results.get_nowait()
            except queue.Empty:
                return
            if pixels is not None:
                try:
                    handle.bind(pixels)
                except ValueError as e:
                    logger.warning("texture '%s' rejected: %s", handle.name, e)
                    handle.fail(str(e))
                    continue
                logger.debug("texture '%s' ready: shape=%s", handle.name, pixels.shape)
            else:
                logger.warning(
                    "texture '%s' failed to load (%s); using base color", handle.name, error
                )
                handle.fail(error or "unknown error")

    def flush(self) -> None:
        """予約済みの読み込みが全て終わるまで待ち、結果を束縛する。"""
        if not self._closed:
            self._requests.join()
        self.tick(0.0)

    def close(self) -> None:
        """ワーカーを停止する（二重呼び出しは無視）。"""
        if self._closed:
            return
        self._closed = True
        self._requests.put(_STOP)
        self._th.join(timeout=2.0)

    # --- worker loop ---
    def _worker(self) -> None:
        while True:
            item = self._requests.get()
            try:
                if item is _STOP:
                    return
                handle, path = item  # type: ignore[misc]
                try:
                    pixels = self._reader(path)
                except Exception as e:  # noqa: BLE001 - 失敗はハンドルへ伝える
                    self._results.put((handle, None, f"{type(e).__name__}: {e}"))
                else:
                    self._results.put((handle, pixels, None))
            finally:
                self._requests.task_done()


__all__ = ["TextureProvider", "read_image"]
