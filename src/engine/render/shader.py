"""
どこで: `engine.render.shader`。
何を: 3D 線描画用の GLSL プログラム（頂点 + ジオメトリ + フラグメント）を ModernGL で生成。
なぜ: コアプロファイルでは `glLineWidth` が効かないため、線分を画面空間の四角形へ膨らませて
      太さを一定に保つ。

uniform:
- `mvp` (mat4): projection @ view（GPU 側は列優先のため転置済みで書き込む）。
- `viewport` (vec2): ウィンドウの画素サイズ。
- `line_thickness` (float): 線幅（画素）。
- `color` (vec4): 線色。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330
in vec3 in_vert;
uniform mat4 mvp;
void main() {
    gl_Position = mvp * vec4(in_vert, 1.0);
}
"""

GEOMETRY_SHADER = """
#version 330
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform vec2 viewport;
uniform float line_thickness;
void main() {
    vec4 p0 = gl_in[0].gl_Position;
    vec4 p1 = gl_in[1].gl_Position;
    // 近平面の手前に出た線分は捨てる
    if (p0.w <= 0.0 || p1.w <= 0.0) {
        return;
    }
    vec2 s0 = p0.xy / p0.w * viewport * 0.5;
    vec2 s1 = p1.xy / p1.w * viewport * 0.5;
    vec2 dir = s1 - s0;
    float len = length(dir);
    dir = len > 1e-6 ? dir / len : vec2(1.0, 0.0);
    vec2 normal = vec2(-dir.y, dir.x) * line_thickness * 0.5 / (viewport * 0.5);

    gl_Position = vec4(p0.xy + normal * p0.w, p0.zw);
    EmitVertex();
    gl_Position = vec4(p0.xy - normal * p0.w, p0.zw);
    EmitVertex();
    gl_Position = vec4(p1.xy + normal * p1.w, p1.zw);
    EmitVertex();
    gl_Position = vec4(p1.xy - normal * p1.w, p1.zw);
    EmitVertex();
    EndPrimitive();
}
"""

FRAGMENT_SHADER = """
#version 330
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """線描画用プログラムを生成して返す。"""
        return ctx.program(
            vertex_shader=VERTEX_SHADER,
            geometry_shader=GEOMETRY_SHADER,
            fragment_shader=FRAGMENT_SHADER,
        )


__all__ = ["Shader", "VERTEX_SHADER", "GEOMETRY_SHADER", "FRAGMENT_SHADER"]
