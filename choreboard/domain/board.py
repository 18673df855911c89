"""
Pure transforms over the board's children and categories.
Every function returns new lists and leaves its inputs untouched.
"""
import time
from typing import List, Optional, Sequence, Tuple

from choreboard.domain.rewards import reward_crossed
from choreboard.schemas.board import Category, Child


def find_child(children: Sequence[Child], child_id: str) -> Optional[Child]:
    return next((child for child in children if child.id == child_id), None)


def find_category(categories: Sequence[Category], category_id: str) -> Optional[Category]:
    return next((category for category in categories if category.id == category_id), None)


def _replace_child(children: Sequence[Child], updated: Child) -> List[Child]:
    return [updated if child.id == updated.id else child for child in children]


# ============================================
# CHORE COUNTS
# ============================================

def mark_chore(
    children: Sequence[Child],
    categories: Sequence[Category],
    child_id: str,
    category_id: str,
) -> Tuple[List[Child], Optional[int]]:
    """
    Add one checkmark for a child in a category.

    Returns:
        (new children, reward) where reward is the newly reached cash amount
        when this checkmark moved the child into a higher tier, else None.
        Unknown child or category ids leave the children unchanged.
    """
    child = find_child(children, child_id)
    if child is None or find_category(categories, category_id) is None:
        return list(children), None

    chores = dict(child.chores)
    chores[category_id] = chores.get(category_id, 0) + 1
    reward = reward_crossed(child.chores, chores)
    return _replace_child(children, child.model_copy(update={"chores": chores})), reward


def unmark_chore(children: Sequence[Child], child_id: str, category_id: str) -> List[Child]:
    """Remove one checkmark; a count that reaches zero is dropped from the mapping."""
    child = find_child(children, child_id)
    if child is None or child.chores.get(category_id, 0) <= 0:
        return list(children)

    chores = dict(child.chores)
    chores[category_id] -= 1
    if chores[category_id] == 0:
        del chores[category_id]
    return _replace_child(children, child.model_copy(update={"chores": chores}))


# ============================================
# CATEGORIES
# ============================================

def new_category_id() -> str:
    return f"cat-{int(time.time() * 1000)}"


def add_category(
    categories: Sequence[Category], name: str, category_id: Optional[str] = None
) -> Tuple[List[Category], Category]:
    category_id = category_id or new_category_id()
    # Two categories created in the same millisecond would collide.
    existing = {category.id for category in categories}
    suffix = 1
    unique_id = category_id
    while unique_id in existing:
        unique_id = f"{category_id}-{suffix}"
        suffix += 1

    category = Category(id=unique_id, name=name)
    return list(categories) + [category], category


def delete_category(
    children: Sequence[Child], categories: Sequence[Category], category_id: str
) -> Tuple[List[Child], List[Category]]:
    """Drop a category and every child's count for it."""
    if find_category(categories, category_id) is None:
        return list(children), list(categories)

    new_categories = [category for category in categories if category.id != category_id]
    new_children = []
    for child in children:
        if category_id in child.chores:
            chores = {key: count for key, count in child.chores.items() if key != category_id}
            child = child.model_copy(update={"chores": chores})
        new_children.append(child)
    return new_children, new_categories


# ============================================
# CHILD EDITS
# ============================================

def update_child(
    children: Sequence[Child],
    child_id: str,
    name: Optional[str] = None,
    avatar_id: Optional[str] = None,
    total_earnings: Optional[float] = None,
) -> List[Child]:
    child = find_child(children, child_id)
    if child is None:
        return list(children)

    changes = {}
    if name is not None:
        changes["name"] = name
    if avatar_id is not None:
        changes["avatar_id"] = avatar_id
    if total_earnings is not None:
        changes["total_earnings"] = float(total_earnings)
    if not changes:
        return list(children)
    return _replace_child(children, child.model_copy(update=changes))
