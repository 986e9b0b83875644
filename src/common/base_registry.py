"""
どこで: `common.base_registry`。
何を: 名前 → 生成関数 の対応表 `BaseRegistry`（登録デコレータ・取得・解除）。
なぜ: コート/ゴールのビルダが形状を文字列で引けるようにし、登録規則を一箇所に置くため。

キーは小文字化し、`-` と空白を `_` に揃える（"Torus-Ring" と "torus_ring" は同じキー）。
"""

from __future__ import annotations

from typing import Any, Callable


class BaseRegistry:
    def __init__(self, kind: str = "entry") -> None:
        self.kind = kind
        self._entries: dict[str, Any] = {}

    @staticmethod
    def normalize(name: str) -> str:
        if not isinstance(name, str):
            raise TypeError(f"キーは str である必要があります: {name!r}")
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        if not key:
            raise ValueError("キーが空です")
        return key

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """登録デコレータ。`name` 省略時は `obj.__name__` を使う。

        同じキーへ別オブジェクトを登録すると `ValueError`（同一オブジェクトの再登録は許可）。
        """

        def decorator(obj: Any) -> Any:
            key = self.normalize(name if name else obj.__name__)
            current = self._entries.get(key)
            if current is not None and current is not obj:
                raise ValueError(f"{self.kind} '{key}' は既に登録されています")
            self._entries[key] = obj
            return obj

        return decorator

    def get(self, name: str) -> Any:
        try:
            return self._entries[self.normalize(name)]
        except KeyError:
            known = ", ".join(self.names()) or "(none)"
            raise KeyError(f"unknown {self.kind} '{name}'; registered: {known}") from None

    def names(self) -> list[str]:
        return sorted(self._entries)

    def unregister(self, name: str) -> None:
        """登録を外す。未登録の名前は無視する。"""
        self._entries.pop(self.normalize(name), None)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.normalize(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["BaseRegistry"]
