"""
どこで: `common` の型定義。
何を: Vec2/Vec3/RGBA などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
RGBA = tuple[float, float, float, float]


def as_vec3(value: object) -> Vec3:
    """長さ 3 の数値列を `Vec3` に正規化する（不正な形状は `ValueError`）。"""
    try:
        x, y, z = value  # type: ignore[misc]
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as e:
        raise ValueError(f"3 要素の数値列が必要です: {value!r}") from e


__all__ = ["Vec2", "Vec3", "RGBA", "as_vec3"]
