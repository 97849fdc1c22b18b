from __future__ import annotations

from typing import Callable, Dict

# Resolves a CSS custom property (e.g. "--chart-title-color") to a hex colour.
ColorResolver = Callable[[str], str]

TITLE_COLOR_VAR = "--chart-title-color"
GRID_COLOR_VAR = "--chart-grid-color"

LIGHT_THEME: Dict[str, str] = {
    TITLE_COLOR_VAR: "#1f2937",
    GRID_COLOR_VAR: "#e5e7eb",
}

DARK_THEME: Dict[str, str] = {
    TITLE_COLOR_VAR: "#f3f4f6",
    GRID_COLOR_VAR: "#374151",
}

FALLBACK_COLOR = "#000000"


def theme_resolver(is_dark_mode: bool = False) -> ColorResolver:
    palette = dict(DARK_THEME if is_dark_mode else LIGHT_THEME)

    def resolve(var_name: str) -> str:
        return palette.get(var_name, FALLBACK_COLOR)

    return resolve
