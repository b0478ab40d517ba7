"""Dark theme."""

from wire_beautify.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2e3440",
    symbol_fill="#3b4252",
    symbol_stroke="#d8dee9",
    symbol_stroke_width=1.5,
    wire_color="#88c0d0",
    wire_width=1.5,
    manual_wire_color="#ebcb8b",
    label_color="#eceff4",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=10.0,
)
