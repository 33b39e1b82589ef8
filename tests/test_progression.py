import asyncio

import pytest

from shinobi_backend.core.errors import UserNotFoundError
from shinobi_backend.core.progression import (
    calc_level_requirements, calc_hp, calc_sp, calc_cp, scale_user_stats
)
from shinobi_backend.models.user_model import UserData, UserStatName
from shinobi_backend.services.progression_service import level_up


def test_level_requirements_grow_with_level():
    requirements = [calc_level_requirements(level) for level in range(1, 50)]
    assert requirements == sorted(requirements)
    assert len(set(requirements)) == len(requirements)
    assert calc_level_requirements(1) == 500


def test_pool_formulas():
    assert calc_hp(1) == calc_sp(1) == calc_cp(1) == 100
    assert calc_hp(5) == 300


def test_scale_user_stats_resets_to_level_baseline():
    ai = UserData(user_id="ai", username="ai", level=3, cur_health=1)
    scale_user_stats(ai)

    assert ai.max_health == ai.cur_health == calc_hp(3)
    assert ai.max_chakra == calc_cp(3)
    assert ai.experience == calc_level_requirements(2)
    assert {getattr(ai, s.value) for s in UserStatName} == {50}


async def test_level_up_without_experience_is_a_noop(db, make_user, reload_user):
    user_id = await make_user(level=1, experience=499)

    assert await level_up(db, user_id) == 1
    stored = await reload_user(user_id)
    assert stored.level == 1
    assert stored.max_health == 100


async def test_level_up_advances_exactly_one_level(db, make_user, reload_user):
    # Enough experience for several levels still only grants one
    user_id = await make_user(level=1, experience=100_000)

    assert await level_up(db, user_id) == 2
    stored = await reload_user(user_id)
    assert stored.level == 2
    assert (stored.max_health, stored.max_stamina, stored.max_chakra) == (calc_hp(2), calc_sp(2), calc_cp(2))


async def test_concurrent_level_ups_never_double_level(session_maker, make_user, reload_user):
    user_id = await make_user(level=1, experience=calc_level_requirements(1))

    async def attempt():
        async with session_maker() as session:
            return await level_up(session, user_id)

    results = await asyncio.gather(attempt(), attempt())

    assert set(results) <= {1, 2}
    assert (await reload_user(user_id)).level == 2


async def test_level_up_unknown_user(db):
    with pytest.raises(UserNotFoundError):
        await level_up(db, "ghost")
