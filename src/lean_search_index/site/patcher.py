"""Injection of the search loader snippet into generated HTML pages."""

import re

from lean_search_index.config import Config

LOADER_SNIPPET = (
    "<!-- lean-search-index -->\n"
    f"<script>{Config.DECLARATION_REGISTRY} = {{}}; "
    f"{Config.TYPE_REGISTRY} = {{}};</script>\n"
    "<script>(function () {"
    ' var script = document.createElement("script");'
    ' script.src = (typeof SITE_ROOT !== "undefined" ? SITE_ROOT : "/")'
    f' + "{Config.ASSET_FILENAME}";'
    " script.defer = true;"
    " document.head.appendChild(script);"
    " })();</script>\n"
)
"""Snippet declaring the two shard registries and loading the client script.

doc-gen4 pages define ``SITE_ROOT`` as the relative path to the documentation
root, which is where the client script is copied.
"""

_CLOSING_BODY = re.compile(r"</body\s*>", re.IGNORECASE)


def patch_html(html: str) -> tuple[bool, str]:
    """Insert the loader snippet before the closing body tag.

    Args:
        html: Full text of an HTML document.

    Returns:
        Tuple of (changed, result). ``changed`` is False and ``result`` is the
        input when the snippet is already present or the document has no
        closing body tag.
    """
    if LOADER_SNIPPET in html:
        return False, html

    closing_tags = list(_CLOSING_BODY.finditer(html))
    if not closing_tags:
        return False, html

    position = closing_tags[-1].start()
    return True, html[:position] + LOADER_SNIPPET + html[position:]
