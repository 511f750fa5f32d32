from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from mathvillage.core.errors import InsufficientFunds, UnknownItem
from mathvillage.core.state import ProgressState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopItem:
    key: str
    name: str
    price: int
    icon: str


class ShopCatalog:
    """Cosmetics on sale in the village chest, loaded from ``data/shop.yaml``."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or Path(__file__).resolve().parent.parent / "data" / "shop.yaml"
        self._items = self._load_items()

    def all(self) -> List[ShopItem]:
        return list(self._items.values())

    def get(self, key: str) -> ShopItem:
        try:
            return self._items[key]
        except KeyError:
            raise UnknownItem(key) from None

    def _load_items(self) -> Dict[str, ShopItem]:
        if not self._path.exists():
            raise FileNotFoundError(f"Shop catalog not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict) or not isinstance(raw.get("items"), list):
            raise ValueError(f"{self._path.name}: expected YAML with an 'items' list")

        items: Dict[str, ShopItem] = {}
        for index, entry in enumerate(raw["items"]):
            if not isinstance(entry, dict):
                raise ValueError(f"{self._path.name}: item {index} is not a mapping")
            key = entry.get("id")
            name = entry.get("name")
            price = entry.get("price")
            if not key or not isinstance(key, str):
                raise ValueError(f"{self._path.name}: item {index} has missing or invalid 'id'")
            if key in items:
                raise ValueError(f"{self._path.name}: duplicate item id {key!r}")
            if not name or not isinstance(name, str):
                raise ValueError(f"{self._path.name}: {key} has missing or invalid 'name'")
            if isinstance(price, bool) or not isinstance(price, int) or price < 0:
                raise ValueError(f"{self._path.name}: {key} has missing or invalid 'price'")
            items[key] = ShopItem(key=key, name=name.strip(), price=price, icon=str(entry.get("icon", "")))

        if not items:
            raise ValueError(f"{self._path.name}: no items defined")
        logger.debug("Loaded %d shop items from %s", len(items), self._path)
        return items


def buy_or_equip(state: ProgressState, item: ShopItem) -> ProgressState:
    """Equip an owned item, or pay for and equip a new one."""
    if item.key in state.owned_cosmetics:
        return state.with_changes(equipped_cosmetic=item.key)
    if state.currency < item.price:
        raise InsufficientFunds(item.key, item.price, state.currency)
    return state.with_changes(
        currency=state.currency - item.price,
        owned_cosmetics=state.owned_cosmetics + (item.key,),
        equipped_cosmetic=item.key,
    )
