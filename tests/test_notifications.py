from shinobi_backend.models.report_model import UserReport, ReportStatus
from shinobi_backend.models.user_model import UserRole, UserStatus
from shinobi_backend.services.notification_service import get_user_overview


async def test_plain_user_has_no_notifications(db, make_user):
    user_id = await make_user()

    overview = await get_user_overview(db, user_id)

    assert overview.user_data.user_id == user_id
    assert overview.notifications == []
    assert overview.server_time > 0


async def test_moderator_sees_open_report_count(db, make_user):
    user_id = await make_user(role=UserRole.MODERATOR)
    db.add(UserReport(reason="a", status=ReportStatus.UNVIEWED))
    db.add(UserReport(reason="b", status=ReportStatus.BAN_ESCALATED))
    db.add(UserReport(reason="c", status=ReportStatus.REPORT_CLEARED))
    await db.commit()

    overview = await get_user_overview(db, user_id)

    assert [(n.href, n.name, n.color) for n in overview.notifications] == [("/reports", "2 waiting!", "blue")]


async def test_regular_user_does_not_see_reports(db, make_user):
    user_id = await make_user(role=UserRole.USER)
    db.add(UserReport(reason="a"))
    await db.commit()

    assert (await get_user_overview(db, user_id)).notifications == []


async def test_status_flags_become_notifications(db, make_user):
    from shinobi_backend.core.time_utils import utcnow

    user_id = await make_user(
        is_banned=True, deletion_at=utcnow(), status=UserStatus.HOSPITALIZED, inbox_news=3,
    )

    names = [n.name for n in (await get_user_overview(db, user_id)).notifications]

    assert names == ["You are banned!", "Being deleted", "In hospital", "3 new messages"]


async def test_battle_notification(db, make_user):
    user_id = await make_user(status=UserStatus.BATTLE)

    links = (await get_user_overview(db, user_id)).notifications

    assert [(n.href, n.color) for n in links] == [("/combat", "red")]


async def test_unknown_user_gets_empty_overview(db):
    overview = await get_user_overview(db, "ghost")
    assert overview.user_data is None
    assert overview.notifications == []
