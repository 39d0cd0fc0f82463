"""
Selector helpers for HTML listing pages.

Listing markup drifts, so containers and fields are located by trying
candidate selectors in priority order.
"""

from typing import Optional, Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


def find_cards(soup: BeautifulSoup, selectors: Sequence[str]) -> list[Tag]:
    """Return the matches of the first selector that finds any elements."""
    for selector in selectors:
        try:
            elements = soup.select(selector)
        except (ValueError, TypeError):
            continue
        if elements:
            return elements
    return []


def extract_text(element: Tag, selector: str) -> Optional[str]:
    """Text of the first descendant matching selector, or None."""
    try:
        sub_el = element.select_one(selector)
    except (ValueError, TypeError):
        return None
    if sub_el is None:
        return None
    text = " ".join(sub_el.get_text(" ", strip=True).split())
    return text or None


def extract_link(element: Tag, base_url: str) -> Optional[str]:
    """Absolute href of the element itself (if an anchor) or its first anchor."""
    anchor = element if element.name == "a" and element.get("href") else element.select_one("a[href]")
    if anchor is None:
        return None
    href = anchor.get("href", "").strip()
    if not href or href.startswith(("#", "javascript:")):
        return None
    return urljoin(base_url, href)
