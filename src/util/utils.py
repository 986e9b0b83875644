"""
どこで: `util.utils`。
何を: 設定ファイル（`configs/default.yaml` + ルート `config.yaml`）の読み込みと節の取り出し、
      アセットディレクトリの解決。
なぜ: ビューア/コート設定/テクスチャ読み込みが同じ場所から同じ規則で設定を得るため。

読み込みはフェイルソフト（ファイルなし/YAML 不正は警告して空扱い）。
ルート `config.yaml` は節ごとに 1 階層だけ既定へ重ねる:

    # configs/default.yaml            # config.yaml
    viewer: {fps: 60, fov: 75}        viewer: {fps: 30}
    # => viewer: {fps: 30, fov: 75}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

_ROOT_MARKERS = (".git", "pyproject.toml", "configs")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def find_project_root(start: Path | None = None) -> Path:
    """`start`（既定はこのファイル）から上へ辿り、`.git`/`pyproject.toml`/`configs` を持つ最初の階層。

    見つからなければ `src/util/` の 2 つ上を返す。
    """
    cur = (start or Path(__file__).parent).resolve()
    for parent in (cur, *cur.parents):
        if any((parent / marker).exists() for marker in _ROOT_MARKERS):
            return parent
    return cur.parent.parent


def _merge_sections(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for name, value in override.items():
        current = merged.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[name] = {**current, **value}
        else:
            merged[name] = value
    return merged


def load_config() -> Dict[str, Any]:
    """既定設定にルート `config.yaml` を重ねた辞書（どちらも無ければ空）。"""
    root = find_project_root()
    defaults = _read_yaml(root / "configs" / "default.yaml")
    return _merge_sections(defaults, _read_yaml(root / "config.yaml"))


def config_section(name: str, cfg: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """トップレベル節を辞書で返す（欠落/辞書以外は空）。"""
    data = load_config() if cfg is None else cfg
    section = data.get(name) if isinstance(data, dict) else None
    return section if isinstance(section, dict) else {}


def resolve_asset_dir(cfg: Dict[str, Any] | None = None) -> Path:
    """テクスチャ格納ディレクトリ（`assets.dir`、相対パスはプロジェクトルート基準）。"""
    path = Path(str(config_section("assets", cfg).get("dir", "assets"))).expanduser()
    return path if path.is_absolute() else find_project_root() / path
