from clipkeeper.models.user import User
from clipkeeper.models.link import Link
from clipkeeper.models.tag import Tag
from clipkeeper.models.custom_tab import CustomTab, LinkTab

__all__ = [
    "User",
    "Link",
    "Tag",
    "CustomTab",
    "LinkTab",
]
