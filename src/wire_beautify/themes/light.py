"""Light theme."""

from wire_beautify.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="#ffffff",
    symbol_fill="#f5f5dc",
    symbol_stroke="#333333",
    symbol_stroke_width=1.5,
    wire_color="#1f5fbf",
    wire_width=1.5,
    manual_wire_color="#c0392b",
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=10.0,
)
