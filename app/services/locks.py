from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence


@dataclass
class LockEnforcement:
    items: List[Any]
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


def enforce_locked_items(selected: Sequence[Any], wardrobe: Iterable[Any], locked_ids: Iterable[Any]) -> LockEnforcement:
    """Make sure every locked wardrobe item is part of the selection.

    For each locked id the model left out, the first selected unlocked item of
    the same type is swapped out, then the locked item is appended. With no
    same-type item to swap the selection just grows. Ids compare as strings.
    Locked ids that are not in the wardrobe are ignored.
    """
    result = list(selected)
    locked: List[str] = []
    for raw in locked_ids or []:
        lid = str(raw)
        if lid not in locked:
            locked.append(lid)
    if not locked:
        return LockEnforcement(items=result)
    locked_set = set(locked)
    by_id = {}
    for item in wardrobe:
        by_id.setdefault(str(item.id), item)

    present = {str(i.id) for i in result}
    out = LockEnforcement(items=result)
    for lid in locked:
        if lid in present:
            continue
        item = by_id.get(lid)
        if item is None:
            continue
        conflict = next(
            (idx for idx, cur in enumerate(result) if cur.type == item.type and str(cur.id) not in locked_set),
            None,
        )
        if conflict is not None:
            out.removed.append(str(result.pop(conflict).id))
        result.append(item)
        present.add(lid)
        out.added.append(lid)
    return out
