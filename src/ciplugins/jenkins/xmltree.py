# xmltree.py
# Tree construction and serialization for Jenkins config markup.
#
# Markup is built bottom-up from plain ElementTree elements: every helper
# returns a new node and nothing writes into a shared builder. Two special
# node kinds exist next to ElementTree's Comment: CDATA sections for
# free-form text and raw user-supplied markup that is copied verbatim.

from __future__ import annotations

import textwrap
import xml.etree.ElementTree as XML
from typing import Any, Iterable, List, Optional
from xml.sax.saxutils import escape

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def CData(text: str) -> XML.Element:
    """CDATA section node, rendered as <![CDATA[...]]>."""
    elem = XML.Element(CData)
    elem.text = text
    return elem


def Raw(markup: str) -> XML.Element:
    """User-supplied markup fragment, rendered as-is."""
    elem = XML.Element(Raw)
    elem.text = markup
    return elem


def text_value(value: Any) -> Optional[str]:
    """Jenkins spelling of a scalar: booleans are lowercase, None stays None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def element(
    tag: str,
    text: Any = None,
    attrib: Optional[dict] = None,
    children: Iterable[Optional[XML.Element]] = (),
) -> XML.Element:
    """
    Build one element node.

    `children` may contain None entries (optional sections that did not
    apply); they are skipped so callers can build a section in one expression.
    """
    elem = XML.Element(tag, dict(attrib or {}))
    elem.text = text_value(text)
    for child in children:
        if child is not None:
            elem.append(child)
    return elem


def optional(tag: str, value: Any) -> Optional[XML.Element]:
    """Element for `value`, or None when the value is not set."""
    if value is None or value == "":
        return None
    return element(tag, value)


def extension_point(markup: Optional[str]) -> Optional[XML.Element]:
    """Raw markup node for a user extension point, or None when empty."""
    if not markup or not markup.strip():
        return None
    return Raw(markup)


# ----------------------------------------------------------------------
# Serialization
# ----------------------------------------------------------------------

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def _attributes(elem: XML.Element) -> str:
    return "".join(
        f' {name}="{escape(value, _ATTRIBUTE_ENTITIES)}"' for name, value in elem.attrib.items()
    )


def _lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _comment(text: str) -> str:
    # "--" is not allowed inside a comment
    while "--" in text:
        text = text.replace("--", "- -")
    return text


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section, split it across two sections
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _write(elem: XML.Element, level: int, indent: str, out: List[str]) -> None:
    pad = indent * level

    if elem.tag is Raw:
        for line in textwrap.dedent(elem.text or "").strip("\n").splitlines():
            out.append(pad + line.rstrip())
        return

    if elem.tag is CData:
        out.extend(_lines(pad + _cdata(elem.text or "")))
        return

    if elem.tag is XML.Comment:
        for line in _lines(_comment(elem.text or "")):
            out.append(f"{pad}<!-- {line} -->")
        return

    tag = elem.tag
    children = list(elem)
    open_tag = f"<{tag}{_attributes(elem)}"

    if not children:
        if elem.text is None:
            out.append(f"{pad}{open_tag}/>")
        else:
            out.extend(_lines(f"{pad}{open_tag}>{escape(elem.text)}</{tag}>"))
        return

    # A lone CDATA child stays on the element's line
    if len(children) == 1 and children[0].tag is CData:
        out.extend(_lines(f"{pad}{open_tag}>{_cdata(children[0].text or '')}</{tag}>"))
        return

    out.append(f"{pad}{open_tag}>")
    for child in children:
        _write(child, level + 1, indent, out)
    out.append(f"{pad}</{tag}>")


def to_xml(
    root: XML.Element,
    *,
    indent: str = "  ",
    newline: str = "\n",
    banner: Iterable[str] = (),
) -> str:
    """
    Serialize a tree into a complete document.

    Args:
        root: document root element
        indent: indentation unit, repeated once per nesting level
        newline: line separator used for every line, including text content
        banner: comment lines written between the declaration and the root

    Returns:
        The document text, terminated by `newline`.
    """
    out: List[str] = [XML_DECLARATION]
    for line in banner:
        _write(XML.Comment(line), 0, indent, out)
    _write(root, 0, indent, out)
    return newline.join(out) + newline
