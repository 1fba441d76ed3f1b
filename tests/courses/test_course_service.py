import pytest

from app.courses import service
from app.exceptions import CourseNotFoundError, NotResourceOwnerError
from shared.constants import Role
from shared.models import CurrentUser


def test_ownership_rule() -> None:
    from app.models import Course

    course = Course(id=1, title="T", slug="t", uploader="U", author_id=10)

    service._ensure_can_modify(course, CurrentUser(id=10))
    service._ensure_can_modify(course, CurrentUser(id=99, role=Role.ADMIN))
    with pytest.raises(NotResourceOwnerError):
        service._ensure_can_modify(course, CurrentUser(id=99))


@pytest.mark.asyncio
async def test_same_title_gets_suffixed_slugs(db_session) -> None:
    first = await service.create_course(db_session, 10, title="Data 101", uploader="Ana")
    second = await service.create_course(db_session, 11, title="Data 101", uploader="Budi")
    third = await service.create_course(db_session, 10, title="  data   101 ", uploader="Ana")

    assert [first.slug, second.slug, third.slug] == ["data-101", "data-101-2", "data-101-3"]
    assert (await service.get_course_by_slug(db_session, "data-101-2")).id == second.id


@pytest.mark.asyncio
async def test_update_and_delete_respect_ownership(db_session) -> None:
    course = await service.create_course(db_session, 10, title="Owned", uploader="Ana")

    with pytest.raises(NotResourceOwnerError):
        await service.update_course(db_session, course.id, CurrentUser(id=11), title="Nope")

    updated = await service.update_course(db_session, course.id, CurrentUser(id=10), title="Mine")
    assert updated.title == "Mine"
    assert updated.slug == "owned"

    await service.delete_course(db_session, course.id, CurrentUser(id=1, role=Role.ADMIN))
    with pytest.raises(CourseNotFoundError):
        await service.get_course_by_id(db_session, course.id)


@pytest.mark.asyncio
async def test_list_filters_by_author(db_session) -> None:
    await service.create_course(db_session, 10, title="A", uploader="Ana")
    await service.create_course(db_session, 11, title="B", uploader="Budi")

    courses, total = await service.list_courses(db_session, author_id=11)

    assert total == 1
    assert [c.title for c in courses] == ["B"]
