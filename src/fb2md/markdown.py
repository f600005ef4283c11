"""Convert FB2 paragraphs into inline Markdown."""

from __future__ import annotations

from bs4.element import CData, NavigableString, Tag

from fb2md.xml_utils import collapse_whitespace, get_href, tag_name

# Leaf formatting tags: nested markup inside them is flattened to text.
_WRAPPERS: dict[str, tuple[str, str]] = {
    "strong": ("**", "**"),
    "b": ("**", "**"),
    "emphasis": ("*", "*"),
    "i": ("*", "*"),
    "u": ("<u>", "</u>"),
    "strikethrough": ("~~", "~~"),
    "s": ("~~", "~~"),
    "sub": ("<sub>", "</sub>"),
    "sup": ("<sup>", "</sup>"),
}


def format_paragraph(paragraph: Tag) -> str:
    """Render a paragraph's text and inline markup as one Markdown line.

    Text nodes have whitespace runs collapsed; the whole result is trimmed
    once at the end. Unknown tags contribute their plain text.
    """
    parts: list[str] = []
    for child in paragraph.children:
        if isinstance(child, Tag):
            parts.append(_format_inline_tag(child))
        elif _is_text(child):
            parts.append(collapse_whitespace(str(child)))
    return "".join(parts).strip()


def _is_text(node: object) -> bool:
    # Comments, processing instructions and doctypes are NavigableStrings too.
    return type(node) in (NavigableString, CData)


def _format_inline_tag(tag: Tag) -> str:
    name = tag_name(tag)
    payload = tag.get_text().strip()

    if name in _WRAPPERS:
        opening, closing = _WRAPPERS[name]
        return f"{opening}{payload}{closing}"

    if name == "a":
        return _format_link(tag, payload)

    return payload


def _format_link(tag: Tag, payload: str) -> str:
    href = (get_href(tag) or "").strip()
    if href.startswith("#"):
        footnote_id = href[1:]
        return f"[^{footnote_id}]" if footnote_id else payload
    if href:
        return f"[{payload}]({href})"
    return payload
