"""
Optional Qt adapter (install with [gui] extra).
"""
from .grouped_item_model import GroupedItemModel

__all__ = [
    "GroupedItemModel",
]
