# shinobi_backend/core/progression.py

"""
Level progression formulas.

- Experience needed to leave level L:  250 × L × (L + 1)
- Max health / stamina / chakra:       100 + 50 × (L − 1)
- AI stat baseline:                    10 + 20 × (L − 1)

All formulas are deterministic and monotonic in level.
"""

from shinobi_backend.models.user_model import UserStatName

POOL_BASE = 100
POOL_PER_LEVEL = 50

STAT_BASE = 10
STAT_PER_LEVEL = 20


def calc_level_requirements(level: int) -> int:
    """Total experience required before advancing past `level`."""
    return 250 * level * (level + 1)


def calc_hp(level: int) -> int:
    return POOL_BASE + POOL_PER_LEVEL * (level - 1)


def calc_sp(level: int) -> int:
    return POOL_BASE + POOL_PER_LEVEL * (level - 1)


def calc_cp(level: int) -> int:
    return POOL_BASE + POOL_PER_LEVEL * (level - 1)


def scale_user_stats(user) -> None:
    """
    Reset a user's pools, experience and trainable stats to the baseline for its level.
    Used for AI records, which have no training history of their own.
    """
    level = max(user.level, 1)
    user.max_health = calc_hp(level)
    user.max_stamina = calc_sp(level)
    user.max_chakra = calc_cp(level)
    user.cur_health = user.max_health
    user.cur_stamina = user.max_stamina
    user.cur_chakra = user.max_chakra
    user.experience = calc_level_requirements(level - 1) if level > 1 else 0
    for stat in UserStatName:
        setattr(user, stat.value, STAT_BASE + STAT_PER_LEVEL * (level - 1))
