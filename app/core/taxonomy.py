import re
from typing import Iterable, Optional

ITEM_TYPES = ["Outerwear", "Top", "Bottom", "Footwear", "Accessory", "Headwear", "Dress"]
DRESS_CODES = ["Casual", "Business Casual", "Formal", "Athletic", "Loungewear"]
MATERIALS = ["Cotton", "Polyester", "Wool", "Silk", "Leather", "Denim", "Linen", "Synthetic", "Gore-Tex", "Other"]
SEASONS = ["spring", "summer", "autumn", "winter"]

# Labels the vision model tends to return instead of our item types
TYPE_ALIASES = {
    "Shoes": "Footwear",
    "Shoe": "Footwear",
    "Sneakers": "Footwear",
    "Boots": "Footwear",
    "Hat": "Headwear",
    "Cap": "Headwear",
    "Jacket": "Outerwear",
    "Coat": "Outerwear",
    "Pants": "Bottom",
    "Jeans": "Bottom",
    "Shorts": "Bottom",
    "Skirt": "Bottom",
    "Shirt": "Top",
    "T-Shirt": "Top",
    "Gown": "Dress",
}

MATERIAL_ALIASES = {
    "Goretex": "Gore-Tex",
    "Gore Tex": "Gore-Tex",
    "Nylon": "Synthetic",
    "Fleece": "Synthetic",
    "Acrylic": "Synthetic",
    "Spandex": "Synthetic",
    "Cashmere": "Wool",
    "Suede": "Leather",
}

# Aliases used to sanity-check that an outfit has a top and a bottom
TOP_ALIASES = frozenset({"top", "shirt", "t-shirt", "blouse", "sweater", "hoodie", "outerwear"})
BOTTOM_ALIASES = frozenset({"bottom", "pants", "jeans", "shorts", "skirt"})


def title_case(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    parts = [p for p in re.split(r"[\s|_]+", value) if p]
    if not parts:
        return None
    return " ".join("-".join(s[:1].upper() + s[1:].lower() for s in p.split("-")) for p in parts)


def normalize_item_type(value: Optional[str]) -> str:
    if not value:
        return "Accessory"
    primary = title_case(value.split("|")[0])
    if not primary:
        return "Accessory"
    if primary in ITEM_TYPES:
        return primary
    return TYPE_ALIASES.get(primary, "Accessory")


def normalize_material(value: Optional[str]) -> str:
    label = title_case(value)
    if not label:
        return "Other"
    if label in MATERIALS:
        return label
    return MATERIAL_ALIASES.get(label, "Other")


def normalize_seasons(tags: Optional[Iterable[str]]) -> Optional[list[str]]:
    if not tags:
        return None
    out: list[str] = []
    for raw in tags:
        if not raw:
            continue
        token = re.sub(r"[\s-]+", "_", raw.strip().lower())
        if token == "fall":
            token = "autumn"
        if token in {"all_season", "allseason", "all_seasons"}:
            candidates = SEASONS
        elif token in SEASONS:
            candidates = [token]
        else:
            continue
        for season in candidates:
            if season not in out:
                out.append(season)
    return out or None


def season_for(month: int, southern: bool = False) -> str:
    idx = {12: 3, 1: 3, 2: 3, 3: 0, 4: 0, 5: 0, 6: 1, 7: 1, 8: 1, 9: 2, 10: 2, 11: 2}[month]
    if southern:
        idx = (idx + 2) % 4
    return SEASONS[idx]
