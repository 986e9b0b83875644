"""
どこで: `engine.render` サブパッケージ。
何を: シーングラフ → GPU 転送・描画の入口（SceneRenderer/LineMesh/Shader/PerspectiveCamera）。
なぜ: シーン構築と描画の責務を分離し、GPU リソース管理を局所化するため。
"""
