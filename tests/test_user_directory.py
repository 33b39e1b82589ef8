from shinobi_backend.models.bloodline_model import Village
from shinobi_backend.models.jutsu_model import Jutsu, UserJutsu
from shinobi_backend.models.user_model import UserRole
from shinobi_backend.services import user_directory
from tests.conftest import seconds_ago


async def test_get_username(db, make_user):
    await make_user(username="itachi")

    assert await user_directory.get_username(db, " itachi ") == "itachi"
    assert await user_directory.get_username(db, "sasuke") is None


async def test_search_users_hides_caller_and_unapproved(db, make_user):
    me = await make_user(username="naruto")
    await make_user(username="naruko")
    await make_user(username="narumi", approved_tos=False)
    await make_user(username="sakura")

    found = await user_directory.search_users(db, me, "naru", show_yourself=False)
    assert [u.username for u in found] == ["naruko"]

    found = await user_directory.search_users(db, me, "naru", show_yourself=True)
    assert sorted(u.username for u in found) == ["naruko", "naruto"]


async def test_search_users_is_limited_to_five(db, make_user):
    for i in range(8):
        await make_user(username=f"genin{i}")

    assert len(await user_directory.search_users(db, "nobody", "genin", show_yourself=True)) == 5


async def test_public_user_includes_village(db, make_user):
    db.add(Village(id="konoki", name="Konoki"))
    await db.commit()
    user_id = await make_user(village_id="konoki")

    user = await user_directory.get_public_user(db, user_id)

    assert user.village.name == "Konoki"
    assert await user_directory.get_public_user(db, "ghost") is None


async def test_public_users_pages_with_cursor(db, make_user):
    for level in (3, 1, 5, 2, 4):
        await make_user(username=f"lvl{level}", level=level)

    first = await user_directory.get_public_users(db, limit=2, order_by="Strongest")
    second = await user_directory.get_public_users(db, limit=2, order_by="Strongest", cursor=first.next_cursor)
    last = await user_directory.get_public_users(db, limit=2, order_by="Strongest", cursor=second.next_cursor)

    assert [u.level for u in first.data] == [5, 4]
    assert [u.level for u in second.data] == [3, 2]
    assert [u.level for u in last.data] == [1]
    assert (first.next_cursor, second.next_cursor, last.next_cursor) == (1, 2, None)
    assert first.data[0].jutsus is None


async def test_public_users_orderings_and_filters(db, make_user):
    await make_user(username="old_timer", level=2, experience=10, updated_at=seconds_ago(5000))
    await make_user(username="fresh", level=2, experience=20, updated_at=seconds_ago(1))
    await make_user(username="mod_user", level=1, role=UserRole.MODERATOR, updated_at=seconds_ago(100))

    online = await user_directory.get_public_users(db, limit=10, order_by="Online")
    assert [u.username for u in online.data] == ["fresh", "mod_user", "old_timer"]

    weakest = await user_directory.get_public_users(db, limit=10, order_by="Weakest")
    assert [u.username for u in weakest.data] == ["mod_user", "old_timer", "fresh"]

    staff = await user_directory.get_public_users(db, limit=10, order_by="Staff")
    assert [u.username for u in staff.data] == ["mod_user"]

    named = await user_directory.get_public_users(db, limit=10, order_by="Online", username="timer")
    assert [u.username for u in named.data] == ["old_timer"]


async def test_ai_listing_includes_jutsus(db, make_user):
    ai_id = await make_user(username="bandit", is_ai=True, approved_tos=False)
    await make_user(username="player")
    db.add(Jutsu(id="fireball", name="Fireball"))
    db.add(UserJutsu(id="uj1", user_id=ai_id, jutsu_id="fireball", level=4))
    await db.commit()

    page = await user_directory.get_public_users(db, limit=10, order_by="Strongest", is_ai=1)

    assert [u.username for u in page.data] == ["bandit"]
    assert page.data[0].jutsus[0].jutsu.name == "Fireball"
    assert page.data[0].jutsus[0].level == 4
