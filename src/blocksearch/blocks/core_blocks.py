"""
Stock block types.

Mirrors the editor's core library: only the text category is searchable by
default, the rest are registered so the category filter has something to
exclude.
"""

from .base import BlockType, registry

CORE_TEXT_BLOCKS = [
    ("core/paragraph", "Paragraph"),
    ("core/heading", "Heading"),
    ("core/list", "List"),
    ("core/list-item", "List item"),
    ("core/quote", "Quote"),
    ("core/pullquote", "Pullquote"),
    ("core/details", "Details"),
    ("core/table", "Table"),
    ("core/code", "Code"),
    ("core/preformatted", "Preformatted"),
    ("core/verse", "Verse"),
    ("core/footnotes", "Footnotes"),
]

CORE_OTHER_BLOCKS = [
    ("core/image", "media", "Image"),
    ("core/gallery", "media", "Gallery"),
    ("core/group", "design", "Group"),
    ("core/columns", "design", "Columns"),
    ("core/column", "design", "Column"),
    ("core/buttons", "design", "Buttons"),
    ("core/button", "design", "Button"),
    ("core/separator", "design", "Separator"),
    ("core/html", "widgets", "Custom HTML"),
    ("core/shortcode", "widgets", "Shortcode"),
]

for _name, _title in CORE_TEXT_BLOCKS:
    registry.register(BlockType(name=_name, category="text", title=_title))

for _name, _category, _title in CORE_OTHER_BLOCKS:
    registry.register(BlockType(name=_name, category=_category, title=_title))
