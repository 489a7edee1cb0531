"""
どこで: `src/spiro/interactive/gl/shader.py`。
何を: 折れ線を太さ付きの四角形列として描くシェーダプログラムを生成する。
なぜ: GL_LINE_STRIP の線幅はドライバ依存で 1px 固定になりやすいため、geometry shader で太らせる。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 410
in vec2 in_vert;
uniform mat4 projection;
void main() {
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

# 入力の線分 1 本を、線幅ぶん法線方向に広げた triangle strip に変換する。
# line_thickness はキャンバス単位。projection の x/y スケールで NDC へ写す。
GEOMETRY_SHADER = """
#version 410
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform mat4 projection;
uniform float line_thickness;
void main() {
    vec4 p0 = gl_in[0].gl_Position;
    vec4 p1 = gl_in[1].gl_Position;
    vec2 scale = vec2(projection[0][0], projection[1][1]);
    vec2 d = (p1.xy - p0.xy) / scale;
    float len = length(d);
    if (len <= 0.0) {
        return;
    }
    vec2 n = vec2(-d.y, d.x) / len * (line_thickness * 0.5) * scale;
    gl_Position = vec4(p0.xy + n, p0.zw); EmitVertex();
    gl_Position = vec4(p0.xy - n, p0.zw); EmitVertex();
    gl_Position = vec4(p1.xy + n, p1.zw); EmitVertex();
    gl_Position = vec4(p1.xy - n, p1.zw); EmitVertex();
    EndPrimitive();
}
"""

FRAGMENT_SHADER = """
#version 410
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """線描画用の moderngl.Program を作成して返す。"""
        return ctx.program(
            vertex_shader=VERTEX_SHADER,
            geometry_shader=GEOMETRY_SHADER,
            fragment_shader=FRAGMENT_SHADER,
        )
