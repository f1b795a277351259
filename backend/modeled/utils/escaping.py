"""HTML escaping for rendered fragments"""

import html
from typing import Any


def escape_html(value: Any) -> str:
    """Make any value safe to embed as HTML text or attribute content.

    None becomes an empty string; everything else is stringified and has
    & < > " ' replaced by entities.
    """
    if value is None:
        return ""
    return html.escape(str(value), quote=True)
