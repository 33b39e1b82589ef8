# shinobi_backend/services/diff_service.py
from typing import Any, Dict, List, Optional


def _fmt(value: Any) -> str:
    if value is None:
        return "nothing"
    if hasattr(value, "value"):  # enums
        return str(value.value)
    return str(value)


def human_diff(old: Dict[str, Any], new: Dict[str, Any], object_name: str = "object",
               ignore: Optional[List[str]] = None) -> List[str]:
    """
    Describe the differences between two snapshots as readable sentences, e.g.
    'user level changed from 1 to 5' or 'jutsu jutsus added Fireball'.
    List values are compared as sets of items.
    """
    ignore = set(ignore or [])
    changes = []
    for key in list(old.keys()) + [k for k in new.keys() if k not in old]:
        if key in ignore:
            continue
        before, after = old.get(key), new.get(key)
        if before == after:
            continue

        if isinstance(before, list) or isinstance(after, list):
            before_items, after_items = list(before or []), list(after or [])
            added = [item for item in after_items if item not in before_items]
            removed = [item for item in before_items if item not in after_items]
            if added:
                changes.append(f"{object_name} {key} added {', '.join(_fmt(i) for i in added)}")
            if removed:
                changes.append(f"{object_name} {key} removed {', '.join(_fmt(i) for i in removed)}")
            continue

        changes.append(f"{object_name} {key} changed from {_fmt(before)} to {_fmt(after)}")
    return changes
