"""Thin query helpers over BeautifulSoup.

All readers return "" rather than None so the parsers never have to
branch on a missing node.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


def make_soup(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        return BeautifulSoup(html, "html.parser")


def clean_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.replace("\xa0", " ").split())


def select_one(root, query: str) -> Optional[Tag]:
    if root is None:
        return None
    return root.select_one(query)


def select(root, query: str) -> List[Tag]:
    if root is None:
        return []
    return root.select(query)


def text_of(node: Optional[Tag]) -> str:
    """Whitespace-collapsed text of the node including its children."""
    if node is None:
        return ""
    return clean_text(node.get_text(" "))


def own_text(node: Optional[Tag]) -> str:
    """Text of the node without the text of nested tags."""
    if node is None:
        return ""
    return clean_text(
        "".join(
            str(c) for c in node.children
            if isinstance(c, NavigableString) and not isinstance(c, Comment)
        )
    )


def lines_of(node: Optional[Tag]) -> List[str]:
    """Text of the node split on <br> line breaks, blank lines dropped."""
    if node is None:
        return []
    lines, current = [], []
    for el in node.descendants:
        if isinstance(el, Tag) and el.name == "br":
            lines.append("".join(current))
            current = []
        elif isinstance(el, NavigableString) and not isinstance(el, Comment):
            current.append(str(el))
    lines.append("".join(current))
    return [clean_text(line) for line in lines if clean_text(line)]


def attr_of(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value.strip()


def previous_label(node: Optional[Tag]) -> str:
    """Text of the element right before ``node`` when it is a <label>, one colon removed.

    Only the immediately preceding element counts: a control whose previous
    element is anything else has no label, it never borrows an earlier one.
    """
    if node is None:
        return ""
    for sibling in node.previous_siblings:
        if not isinstance(sibling, Tag):
            continue
        if sibling.name != "label":
            return ""
        return text_of(sibling).replace(":", "", 1).strip()
    return ""
