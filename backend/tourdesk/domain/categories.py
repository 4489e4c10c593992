from typing import Any, Dict, List


def group_categories(categories: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Group categories for a two-level select.

    A category without ``parent_category`` heads its own group; a category whose
    ``parent_category`` label matches another category's ``name`` is listed under
    it. Labels that match no category still form a group of their own. Groups and
    members keep the input order.
    """
    groups: Dict[str, Dict[str, Any]] = {}

    for category in categories:
        if not category.get("parent_category"):
            groups.setdefault(category["name"], {"label": category["name"], "parent": category, "categories": []})
            groups[category["name"]]["parent"] = category

    for category in categories:
        label = category.get("parent_category")
        if not label:
            continue
        group = groups.setdefault(label, {"label": label, "parent": None, "categories": []})
        group["categories"].append(category)

    return list(groups.values())
