"""
どこで: `api.viewer_runner`。
何を: `api.viewer.run_viewer` の下請け（設定解決/ウィンドウと描画器の初期化）。
なぜ: `run_viewer` をイベント配線だけの薄い関数に保つため。
"""
