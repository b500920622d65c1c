from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ThemeColors:
    title: str
    text: str
    icon: str
    bg: str
    border: str
    footer: str


DEFAULT_THEME = "default"

THEMES = MappingProxyType({
    "default": ThemeColors(
        title="#2f80ed", text="#434d58", icon="#4c71f2",
        bg="#fffefe", border="#e4e2e2", footer="#888",
    ),
    "dark": ThemeColors(
        title="#3fb950", text="#c9d1d9", icon="#58a6ff",
        bg="#0d1117", border="#30363d", footer="#7d8590",
    ),
    "radical": ThemeColors(
        title="#fe428e", text="#a9fef7", icon="#f8d847",
        bg="#141321", border="#382f45", footer="#a9fef7",
    ),
})

FALLBACK_LANG_COLOR = "#858585"
LANG_COLORS = MappingProxyType({
    "JavaScript": "#f1e05a", "TypeScript": "#2b7489", "Python": "#3572A5",
    "Java": "#b07219", "Go": "#00ADD8", "Rust": "#dea584", "Ruby": "#701516",
    "PHP": "#4F5D95", "C++": "#f34b7d", "C": "#555555", "C#": "#178600",
    "Swift": "#ffac45", "Kotlin": "#F18E33", "Shell": "#89e051",
    "HTML": "#e34c26", "CSS": "#563d7c",
})


def get_theme_colors(name):
    """Resolve a theme name, falling back to the default palette."""
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])


def get_language_color(language):
    return LANG_COLORS.get(language, FALLBACK_LANG_COLOR)
