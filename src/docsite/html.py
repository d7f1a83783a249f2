"""
Shared HTML utilities for the docs pages.

Provides:
- DOCS_THEME_CSS: light theme for docs pages (top nav, breadcrumbs, code)
- markdown_to_html(): converts our markdown subset to HTML (no dependencies)
- render_breadcrumbs(): the breadcrumb trail above a page title
- wrap_page(): wraps content in a full HTML document with the theme
"""
import re
from html import escape as html_escape

from src.docsite.config import SITE_NAME
from src.docsite.navigation import NAV_SECTIONS


# ---------------------------------------------------------------------------
# Theme CSS
# ---------------------------------------------------------------------------
DOCS_THEME_CSS = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', system-ui, sans-serif;
        background: #ffffff;
        color: #1a1a1a;
        line-height: 1.6;
        -webkit-font-smoothing: antialiased;
    }
    .topnav {
        position: sticky;
        top: 0;
        background: #fff;
        border-bottom: 1px solid #e5e7eb;
        padding: 0 24px;
        height: 56px;
        display: flex;
        align-items: center;
        gap: 24px;
        font-size: 14px;
    }
    .topnav .brand { font-weight: 700; color: #1a1a1a; }
    .topnav a { color: #6b7280; }
    .topnav a.active { color: #1a1a1a; font-weight: 600; }
    .container {
        max-width: 760px;
        margin: 0 auto;
        padding: 32px 24px 64px;
    }
    .breadcrumb {
        font-size: 13px;
        color: #6b7280;
        margin-bottom: 8px;
    }
    .breadcrumb .sep { margin: 0 6px; color: #d1d5db; }
    .breadcrumb .current { color: #1a1a1a; }
    .page-description { color: #4b5563; font-size: 17px; margin-bottom: 24px; }
    h1 { font-size: 30px; font-weight: 700; margin-bottom: 8px; }
    h2 { font-size: 22px; font-weight: 600; margin-bottom: 8px; margin-top: 32px; }
    h3 { font-size: 17px; font-weight: 600; margin-bottom: 6px; margin-top: 24px; }
    p { margin-bottom: 12px; }
    a { color: #2563eb; text-decoration: none; }
    a:hover { text-decoration: underline; }
    hr { border: none; border-top: 1px solid #e5e7eb; margin: 28px 0; }
    strong { font-weight: 600; }
    code {
        font-family: 'SF Mono', 'Menlo', 'Monaco', monospace;
        font-size: 13px;
        background: #f1f3f5;
        padding: 2px 6px;
        border-radius: 4px;
    }
    pre {
        background: #0f172a;
        color: #e2e8f0;
        padding: 16px;
        border-radius: 8px;
        overflow-x: auto;
        margin: 12px 0 16px;
        font-size: 13px;
        line-height: 1.5;
    }
    pre code { background: none; padding: 0; color: inherit; }
    ul { margin: 8px 0 12px 24px; }
    li { margin-bottom: 4px; }
    table {
        width: 100%;
        border-collapse: collapse;
        margin: 12px 0 16px;
        font-size: 14px;
    }
    th { text-align: left; padding: 8px 12px; border-bottom: 2px solid #e5e7eb; font-weight: 600; }
    td { padding: 8px 12px; border-bottom: 1px solid #f1f3f5; }
    .muted { color: #6b7280; font-size: 14px; }
"""


def render_topnav(current_path=""):
    """Top navigation bar with the active section highlighted."""
    links = []
    for section in NAV_SECTIONS:
        url = section["url"]
        active = current_path == url or current_path.startswith(url + "/")
        css = ' class="active"' if active else ""
        links.append(f'<a href="{url}"{css}>{html_escape(section["title"])}</a>')
    return (
        '<nav class="topnav">'
        f'<a href="/" class="brand">{html_escape(SITE_NAME)}</a>'
        f'{"".join(links)}'
        '<a href="/llms-full.txt">llms-full.txt</a>'
        "</nav>"
    )


def render_breadcrumbs(items):
    """
    Render a breadcrumb trail.

    Input: list of BreadcrumbItem
    Output: <nav> HTML, or "" for an empty trail

    Items with a url become links; the current page is a plain span.
    """
    if not items:
        return ""
    parts = []
    for item in items:
        name = html_escape(item.name)
        if item.url:
            parts.append(f'<a href="{html_escape(item.url)}">{name}</a>')
        else:
            parts.append(f'<span class="current">{name}</span>')
    sep = '<span class="sep">/</span>'
    return f'<nav class="breadcrumb" aria-label="Breadcrumb">{sep.join(parts)}</nav>'


def wrap_page(title, body_html, extra_css="", description="", current_path=""):
    """
    Wrap HTML body content in a full document with the docs theme.

    Input: page title (str), body HTML content (str), optional extra CSS,
           meta description, and the current path (for the top nav)
    Output: complete HTML document (str)
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{html_escape(title)}</title>
    <meta name="description" content="{html_escape(description)}">
    <style>{DOCS_THEME_CSS}{extra_css}</style>
</head>
<body>
    {render_topnav(current_path)}
    <div class="container">
        {body_html}
    </div>
</body>
</html>"""


def markdown_to_html(md):
    """
    Convert a markdown string to HTML. Handles the subset our docs pages
    use — no external dependencies.

    Input: markdown string
    Output: HTML string

    Supports: headers, bold, inline code, fenced code blocks (language kept
    as a language-<tag> class), tables, unordered lists, links, horizontal
    rules, paragraphs.
    """
    lines = md.split("\n")
    html_parts = []
    i = 0
    in_list = False

    while i < len(lines):
        line = lines[i]

        # --- Fenced code blocks ---
        fence = re.match(r"^\s*```\s*([^\s`]*)", line)
        if fence:
            if in_list:
                html_parts.append("</ul>")
                in_list = False
            language = fence.group(1).lower()
            code_lines = []
            i += 1
            while i < len(lines) and not lines[i].strip().startswith("```"):
                code_lines.append(html_escape(lines[i]))
                i += 1
            css = f' class="language-{html_escape(language)}"' if language else ""
            html_parts.append(f"<pre><code{css}>{chr(10).join(code_lines)}</code></pre>")
            i += 1
            continue

        # --- Horizontal rule ---
        if line.strip() == "---":
            if in_list:
                html_parts.append("</ul>")
                in_list = False
            html_parts.append("<hr>")
            i += 1
            continue

        # --- Headers ---
        header_match = re.match(r"^(#{1,3})\s+(.+)$", line)
        if header_match:
            if in_list:
                html_parts.append("</ul>")
                in_list = False
            level = len(header_match.group(1))
            text = _inline_format(header_match.group(2))
            html_parts.append(f"<h{level}>{text}</h{level}>")
            i += 1
            continue

        # --- Table ---
        if "|" in line and i + 1 < len(lines) and re.match(r"^\s*\|[\s\-:|]+\|\s*$", lines[i + 1]):
            if in_list:
                html_parts.append("</ul>")
                in_list = False
            table_html, i = _parse_table(lines, i)
            html_parts.append(table_html)
            continue

        # --- Unordered list ---
        list_match = re.match(r"^(\s*)[*-]\s+(.+)$", line)
        if list_match:
            if not in_list:
                html_parts.append("<ul>")
                in_list = True
            html_parts.append(f"<li>{_inline_format(list_match.group(2))}</li>")
            i += 1
            continue

        if in_list:
            html_parts.append("</ul>")
            in_list = False

        # --- Blank line ---
        if not line.strip():
            i += 1
            continue

        # --- Paragraph (default) ---
        html_parts.append(f"<p>{_inline_format(line)}</p>")
        i += 1

    if in_list:
        html_parts.append("</ul>")

    return "\n".join(html_parts)


def _inline_format(text):
    """
    Apply inline markdown formatting to a line of text.

    Handles: **bold**, `code`, [links](url)
    Escapes HTML first, then adds our tags.
    """
    text = html_escape(text)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"`(.+?)`", r"<code>\1</code>", text)
    text = re.sub(r"\[(.+?)\]\((.+?)\)", r'<a href="\2">\1</a>', text)
    return text


def _parse_table(lines, start):
    """
    Parse a markdown table starting at the given line index.

    Input: all lines, starting index (the header row)
    Output: (html_string, next_line_index)
    """
    parts = ["<table>", "<thead><tr>"]
    for cell in _table_cells(lines[start]):
        parts.append(f"<th>{_inline_format(cell)}</th>")
    parts.append("</tr></thead>")

    # Skip separator row (|---|---|)
    i = start + 2

    parts.append("<tbody>")
    while i < len(lines) and "|" in lines[i] and lines[i].strip():
        parts.append("<tr>")
        for cell in _table_cells(lines[i]):
            parts.append(f"<td>{_inline_format(cell)}</td>")
        parts.append("</tr>")
        i += 1
    parts.append("</tbody></table>")

    return "\n".join(parts), i


def _table_cells(line):
    return [c.strip() for c in line.split("|") if c.strip()]
