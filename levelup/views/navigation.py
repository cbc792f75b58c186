"""
Bottom navigation bar.
"""

from typing import List
from pydantic import BaseModel


class NavItem(BaseModel):
    href: str
    label: str
    icon: str
    active: bool = False


NAV_ITEMS = [
    NavItem(href="/", label="Home", icon="🏠"),
    NavItem(href="/upload", label="Upload", icon="⬆️"),
    NavItem(href="/stats", label="Stats", icon="📈"),
    NavItem(href="/plan", label="Plan", icon="📅"),
]


def build_nav(pathname: str) -> List[NavItem]:
    """
    Navigation items for a page, with the current destination marked.

    An item is active only when its href equals the path exactly.
    """
    return [item.model_copy(update={"active": item.href == pathname}) for item in NAV_ITEMS]
