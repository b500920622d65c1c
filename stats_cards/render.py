from .themes import get_language_color, get_theme_colors

CARD_WIDTH = 495
STATS_HEIGHT = 195
LANG_BASE_HEIGHT = 80
LANG_ROW_HEIGHT = 25
ERROR_MAX_LINES = 5
FOOTER = "Powered by github-stats-card | Self-hosted stats service"
FONT = "'Segoe UI', Ubuntu, Arial, sans-serif"


# --- UTILITIES ---
def escape_xml(text):
    """Sanitize text for SVG output."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_count(n):
    """Thousands grouping, e.g. 12345 -> '12,345'."""
    return f"{int(n):,}"


def render_stats_card(stats, theme=None):
    colors = get_theme_colors(theme)
    rows = [
        ("Total Stars", format_count(stats.total_stars)),
        ("Total Forks", format_count(stats.total_forks)),
        ("Total Repos", str(stats.total_repos)),
        ("Followers", f"{stats.followers} | Following: {stats.following}"),
    ]
    body = "\n".join(
        f'    <g transform="translate(0, {i * 25})">'
        f'<circle cx="6" cy="15" r="5" class="icon"/>'
        f'<text x="20" y="20" class="stat">{label}: {escape_xml(value)}</text></g>'
        for i, (label, value) in enumerate(rows)
    )
    return f"""
<svg width="{CARD_WIDTH}" height="{STATS_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {STATS_HEIGHT}" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <style>
      .title {{ fill: {colors.title}; font-family: {FONT}; font-size: 18px; font-weight: 600; }}
      .stat {{ fill: {colors.text}; font-family: {FONT}; font-size: 14px; }}
      .icon {{ fill: {colors.icon}; }}
      .footer {{ fill: {colors.footer}; font-family: Arial, sans-serif; font-size: 10px; }}
    </style>
  </defs>
  <rect width="{CARD_WIDTH}" height="{STATS_HEIGHT}" fill="{colors.bg}" stroke="{colors.border}" stroke-width="1" rx="4.5"/>
  <text x="25" y="35" class="title">{escape_xml(stats.display_name)}&#39;s GitHub Stats</text>
  <g transform="translate(25, 55)">
{body}
  </g>
  <text x="25" y="185" class="footer">{escape_xml(FOOTER)}</text>
</svg>""".strip()


def render_languages_card(languages, theme=None):
    colors = get_theme_colors(theme)
    height = LANG_BASE_HEIGHT + len(languages) * LANG_ROW_HEIGHT
    rows = "\n".join(
        f'    <g transform="translate(0, {i * LANG_ROW_HEIGHT})">'
        f'<circle cx="10" cy="10" r="5" fill="{get_language_color(lang.name)}"/>'
        f'<text x="20" y="14" class="lang">{escape_xml(lang.name)}</text>'
        f'<text x="445" y="14" text-anchor="end" class="percent">{escape_xml(lang.percentage)}%</text></g>'
        for i, lang in enumerate(languages)
    )
    return f"""
<svg width="{CARD_WIDTH}" height="{height}" viewBox="0 0 {CARD_WIDTH} {height}" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <style>
      .title {{ fill: {colors.title}; font-family: {FONT}; font-size: 18px; font-weight: 600; }}
      .lang {{ fill: {colors.text}; font-family: {FONT}; font-size: 14px; }}
      .percent {{ fill: {colors.text}; font-family: {FONT}; font-size: 14px; font-weight: 600; }}
    </style>
  </defs>
  <rect width="{CARD_WIDTH}" height="{height}" fill="{colors.bg}" stroke="{colors.border}" stroke-width="1" rx="4.5"/>
  <text x="25" y="35" class="title">Most Used Languages</text>
  <g transform="translate(25, 50)">
{rows}
  </g>
</svg>""".strip()


def render_error_card(error_msg):
    """Standardized error card."""
    lines = str(error_msg).splitlines()[:ERROR_MAX_LINES] or ["Unknown error"]
    height = 70 + len(lines) * 20
    text = "\n".join(
        f'  <text x="25" y="{70 + i * 20}" class="text">{escape_xml(line)}</text>'
        for i, line in enumerate(lines)
    )
    return f"""
<svg width="{CARD_WIDTH}" height="{height}" viewBox="0 0 {CARD_WIDTH} {height}" xmlns="http://www.w3.org/2000/svg">
  <style>
    .header {{ font: 600 16px Arial, sans-serif; fill: #ff0000; }}
    .text {{ font: 400 14px Arial, sans-serif; fill: #333; }}
  </style>
  <rect width="{CARD_WIDTH}" height="{height}" fill="#fffefe" stroke="#e4e2e2" stroke-width="1" rx="4.5"/>
  <text x="25" y="40" class="header">Error</text>
{text}
</svg>""".strip()
