"""HTML helpers shared by every endpoint: encoding, tables and the page shell."""

import html
from collections.abc import Iterable

from app.core.settings import settings as st

EMPTY_VALUE = "(empty)"
NO_DATA_ROW = '<tr><td colspan="2" class="text-muted">No data received</td></tr>'
NO_FILE_ROW = '<tr><td colspan="2" class="text-muted">No file uploaded</td></tr>'

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css"


def html_encode(value: object | None) -> str:
    """Escape a value for interpolation into HTML.

    Any user input echoed back MUST go through this. ``None`` renders as a
    visible placeholder.
    """
    if value is None:
        value = EMPTY_VALUE
    return html.escape(str(value), quote=True)


def wrap_in_page(title: str, body: str) -> str:
    """Wrap a body fragment in the shared Bootstrap page shell."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html_encode(title)}</title>
    <link href="{BOOTSTRAP_CSS}" rel="stylesheet">
</head>
<body>
    <nav class="navbar navbar-dark bg-dark mb-4">
        <div class="container">
            <a class="navbar-brand" href="/">{html_encode(st.API_NAME)}</a>
        </div>
    </nav>
    <div class="container">
        {body}
        <hr class="my-4">
        <p><a href="/" class="btn btn-outline-secondary btn-sm">&larr; Back to forms</a></p>
    </div>
</body>
</html>"""


def build_rows(pairs: Iterable[tuple[str, str | None]]) -> str:
    rows = "".join(
        f"""
                <tr>
                    <td><code>{html_encode(key)}</code></td>
                    <td>{html_encode(value)}</td>
                </tr>"""
        for key, value in pairs
    )
    return rows or NO_DATA_ROW


def build_table(pairs: Iterable[tuple[str, str | None]], value_header: str = "Value") -> str:
    """Render key/value pairs as a table, with a placeholder row when empty."""
    return f"""
        <table class="table table-bordered table-striped">
            <thead class="table-dark">
                <tr><th>Name (key)</th><th>{html_encode(value_header)}</th></tr>
            </thead>
            <tbody>{build_rows(pairs)}</tbody>
        </table>"""
