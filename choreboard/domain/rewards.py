from typing import List, Mapping, NamedTuple, Optional

from choreboard.config import (
    REWARD_TIER_1_CASH,
    REWARD_TIER_1_CATEGORIES,
    REWARD_TIER_1_CHORES,
    REWARD_TIER_2_CASH,
    REWARD_TIER_2_CATEGORIES,
    REWARD_TIER_2_CHORES,
)


class RewardTier(NamedTuple):
    min_chores: int
    min_categories: int
    cash: int


# Highest reward first; the first tier reached wins.
REWARD_TIERS: List[RewardTier] = [
    RewardTier(REWARD_TIER_2_CHORES, REWARD_TIER_2_CATEGORIES, REWARD_TIER_2_CASH),
    RewardTier(REWARD_TIER_1_CHORES, REWARD_TIER_1_CATEGORIES, REWARD_TIER_1_CASH),
]


def total_chores(chores: Mapping[str, int]) -> int:
    return sum(chores.values())


def distinct_categories(chores: Mapping[str, int]) -> int:
    return len([category_id for category_id, count in chores.items() if count > 0])


def calculate_weekly_earnings(chores: Mapping[str, int], tiers: Optional[List[RewardTier]] = None) -> int:
    """
    Cash reward earned by one child's chore counts for the week.
    Tiers are not cumulative: only the highest tier reached pays out.
    """
    chore_count = total_chores(chores)
    category_count = distinct_categories(chores)
    for tier in tiers if tiers is not None else REWARD_TIERS:
        if chore_count >= tier.min_chores and category_count >= tier.min_categories:
            return tier.cash
    return 0


def reward_crossed(before: Mapping[str, int], after: Mapping[str, int]) -> Optional[int]:
    """Return the new reward if going from `before` to `after` raised it, else None."""
    old_reward = calculate_weekly_earnings(before)
    new_reward = calculate_weekly_earnings(after)
    if new_reward > old_reward:
        return new_reward
    return None
