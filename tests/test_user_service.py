from sqlalchemy import DateTime
from sqlmodel import select

from shinobi_backend.core.time_utils import utcnow
from shinobi_backend.models.bloodline_model import Bloodline
from shinobi_backend.models.jutsu_model import Jutsu, UserJutsu
from shinobi_backend.models.report_model import UserReport, UserReportComment, ReportLog
from shinobi_backend.models.social_model import (
    UserAttribute, HistoricalAvatar, ForumPost, ConversationComment, User2Conversation
)
from shinobi_backend.models.user_model import UserData, UserStatName
from shinobi_backend.services.user_service import (
    fetch_regenerated_user, fetch_user, update_if, delete_user, fetch_attributes,
    _persist_regeneration,
)
from shinobi_backend.core.errors import UserNotFoundError
from tests.conftest import seconds_ago

import pytest


async def test_refresh_after_five_minutes_fills_health(db, make_user, reload_user):
    user_id = await make_user(
        cur_health=50, max_health=100, regeneration=2,
        regen_at=seconds_ago(300), updated_at=seconds_ago(301),
    )

    user = await fetch_regenerated_user(db, user_id)

    assert user.cur_health == 100
    stored = await reload_user(user_id)
    assert stored.cur_health == 100
    assert stored.regen_at > seconds_ago(60)


async def test_recent_user_is_not_refreshed_without_force(db, make_user, reload_user):
    user_id = await make_user(cur_health=50, regeneration=2, regen_at=seconds_ago(100), updated_at=seconds_ago(100))

    user = await fetch_regenerated_user(db, user_id)
    assert user.cur_health == 50

    forced = await fetch_regenerated_user(db, user_id, force_regen=True)
    assert forced.cur_health == pytest.approx(100)  # 50 + 2 * 100, capped
    assert (await reload_user(user_id)).cur_health == pytest.approx(100)


async def test_energy_does_not_regenerate_while_training(db, make_user, reload_user):
    user_id = await make_user(
        cur_energy=10, cur_stamina=10, regeneration=1, regen_at=seconds_ago(50),
        currently_training=UserStatName.SPEED, training_started_at=seconds_ago(50),
    )

    user = await fetch_regenerated_user(db, user_id, force_regen=True)

    assert user.cur_energy == 10
    assert user.cur_stamina == pytest.approx(60, abs=1)
    assert (await reload_user(user_id)).cur_energy == 10


async def test_bloodline_bonus_is_applied_but_never_persisted(db, make_user, reload_user):
    db.add(Bloodline(id="senju", name="Senju", regen_increase=0.5))
    await db.commit()
    user_id = await make_user(regeneration=1, bloodline_id="senju")

    user = await fetch_regenerated_user(db, user_id, force_regen=True)

    assert user.regeneration == 1.5
    assert user.bloodline.name == "Senju"
    assert (await reload_user(user_id)).regeneration == 1


async def test_missing_user_returns_none(db):
    assert await fetch_regenerated_user(db, "ghost") is None
    with pytest.raises(UserNotFoundError):
        await fetch_user(db, "ghost")


async def test_stale_write_back_never_touches_energy_of_training_row(engine, make_user, reload_user):
    # Row started training after the read that scheduled the write
    user_id = await make_user(
        cur_energy=40, cur_health=10, currently_training=UserStatName.STRENGTH,
        training_started_at=utcnow(),
    )
    regen_at = (await reload_user(user_id)).regen_at

    await _persist_regeneration(engine, user_id, 25, True, regen_at, utcnow())

    stored = await reload_user(user_id)
    assert stored.cur_energy == 40
    assert stored.cur_health == 35


async def test_write_back_is_skipped_when_row_was_refreshed_meanwhile(engine, make_user, reload_user):
    user_id = await make_user(cur_health=10)

    await _persist_regeneration(engine, user_id, 25, True, seconds_ago(999), utcnow())

    assert (await reload_user(user_id)).cur_health == 10


async def test_update_if_reports_zero_rows_on_failed_precondition(db, make_user, reload_user):
    user_id = await make_user(level=3)

    assert await update_if(db, user_id, UserData.level == 2, level=4) == 0
    assert await update_if(db, user_id, UserData.level == 3, level=4) == 1
    assert (await reload_user(user_id)).level == 4


async def test_delete_user_removes_every_dependent_row(db, make_user):
    victim = await make_user()
    bystander = await make_user()

    db.add(Jutsu(id="fireball", name="Fireball"))
    report = UserReport(reason="spam", reported_user_id=victim)
    db.add(report)
    await db.commit()

    for owner in (victim, bystander):
        db.add(UserAttribute(user_id=owner, attribute="Red hair"))
        db.add(HistoricalAvatar(user_id=owner, avatar="a.png"))
        db.add(UserReportComment(user_id=owner, report_id=report.id, content="hm"))
        db.add(ForumPost(user_id=owner, thread_id=1, content="hello"))
        db.add(ConversationComment(user_id=owner, conversation_id=1, content="yo"))
        db.add(User2Conversation(user_id=owner, conversation_id=1))
        db.add(UserJutsu(id=f"uj-{owner}", user_id=owner, jutsu_id="fireball"))
    db.add(ReportLog(target_user_id=victim, staff_user_id=bystander, action="warn"))
    db.add(ReportLog(target_user_id=bystander, staff_user_id=victim, action="warn"))
    db.add(ReportLog(target_user_id=bystander, staff_user_id=None, action="ban"))
    await db.commit()

    await delete_user(db, victim)

    for model in (UserAttribute, HistoricalAvatar, UserReportComment, ForumPost,
                  ConversationComment, User2Conversation, UserJutsu):
        rows = (await db.execute(select(model))).scalars().all()
        assert [r.user_id for r in rows] == [bystander], model.__name__

    logs = (await db.execute(select(ReportLog))).scalars().all()
    assert len(logs) == 1 and logs[0].action == "ban"
    assert await db.get(UserData, victim) is None
    assert await db.get(UserData, bystander) is not None


async def test_fetch_attributes(db, make_user):
    user_id = await make_user()
    db.add(UserAttribute(user_id=user_id, attribute="Blue eyes"))
    await db.commit()

    attributes = await fetch_attributes(db, user_id)
    assert [a.attribute for a in attributes] == ["Blue eyes"]


@pytest.mark.parametrize(
    "model, column",
    [
        (UserData, "updated_at"),
        (UserData, "regen_at"),
        (UserData, "training_started_at"),
        (UserData, "deletion_at"),
        (ReportLog, "created_at"),
        (HistoricalAvatar, "created_at"),
    ],
)
def test_timestamp_columns_store_naive_utc(model, column):
    column_type = model.__table__.c[column].type
    assert type(column_type) is DateTime
    assert column_type.timezone is False


async def test_naive_timestamps_round_trip(db, make_user, reload_user):
    started = seconds_ago(30)
    user_id = await make_user(currently_training=UserStatName.SPEED, training_started_at=started)

    stored = await reload_user(user_id)

    assert stored.training_started_at == started
    assert stored.training_started_at.tzinfo is None
