"""
Тесты для Service Layer (бизнес-логика).

Проверяем:
- Общий CrudService: list/get/create/update/set_status
- Переходы статусов (нельзя активировать активный, приостановить приостановленный)
- Участников проекта
- Задачи и учёт времени
"""

import uuid
from datetime import datetime

import pytest

from task_tracker.core.exceptions import BadRequestError, NotFoundError
from task_tracker.core.responses import ActionResponse, ResponseBuilder
from task_tracker.models import Project, Task, TaskPriority
from task_tracker.schemas import (
    MAX_ESTIMATED_TIME,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    TaskCreate,
    TaskUpdate,
    UserCreate,
    UserUpdate,
)
from task_tracker.services import ProjectService, TaskService, UserService

from conftest import make_project, make_user


def task_payload(project_id, executor_id, checker_id, **overrides) -> dict:
    payload = {
        "name": "Write docs",
        "project_id": project_id,
        "priority": "high",
        "estimated_time": 60,
        "executor_id": executor_id,
        "checker_id": checker_id,
    }
    payload.update(overrides)
    return payload


# ============================================================================
# RESPONSE BUILDER
# ============================================================================


@pytest.mark.asyncio
async def test_response_builder_shapes(test_db, admin):
    """Test: три формата ответа - list, entity, action."""
    project = await make_project(test_db, "Alpha", admin)

    listed = ResponseBuilder.list([project], ProjectResponse)
    single = ResponseBuilder.entity(project, ProjectResponse)
    action = ResponseBuilder.action("Done", {"affected": 1})

    assert [item.name for item in listed.items] == ["Alpha"]
    assert single.item.id == project.id
    assert single.item.owner.email == "admin@example.com"
    assert action.model_dump() == {"message": "Done", "result": {"affected": 1}}


# ============================================================================
# PROJECT SERVICE (CrudService)
# ============================================================================


@pytest.mark.asyncio
async def test_create_project_sets_owner(test_db, admin):
    """Test: создание проекта - сообщение, id и владелец = автор."""
    service = ProjectService(test_db)

    result = await service.create(ProjectCreate(name="Alpha"), admin)
    await test_db.commit()

    assert isinstance(result, ActionResponse)
    assert result.message == "Project successfully created"

    project_id = uuid.UUID(result.result["id"])
    response = await service.get(admin, project_id)

    assert response.item.name == "Alpha"
    assert response.item.is_active is True
    assert response.item.owner.id == admin.id


@pytest.mark.asyncio
async def test_get_project_not_found(test_db, admin):
    """Test: несуществующий проект - NotFound."""
    service = ProjectService(test_db)

    with pytest.raises(NotFoundError, match="Project not found"):
        await service.get(admin, uuid.uuid4())


@pytest.mark.asyncio
async def test_get_project_hidden_from_non_participant(test_db, admin, outsider):
    """Test: активный проект без участия выглядит как несуществующий."""
    project = await make_project(test_db, "Alpha", admin)
    service = ProjectService(test_db)

    with pytest.raises(NotFoundError):
        await service.get(outsider, project.id)

    assert await service.find_entity(outsider, project.id) is None
    assert (await service.find_entity(admin, project.id)).name == "Alpha"


@pytest.mark.asyncio
async def test_get_all_projects_scoped(test_db, admin, member):
    """Test: список проектов зависит от пользователя."""
    await make_project(test_db, "Alpha", admin, participants=[member])
    await make_project(test_db, "Beta", admin)
    service = ProjectService(test_db)

    member_view = await service.get_all(member)
    admin_view = await service.get_all(admin)

    assert [p.name for p in member_view.items] == ["Alpha"]
    assert {p.name for p in admin_view.items} == {"Alpha", "Beta"}


@pytest.mark.asyncio
async def test_update_project(test_db, admin):
    """Test: обновление проекта целиком."""
    project = await make_project(test_db, "Old Name", admin)
    service = ProjectService(test_db)

    result = await service.update(ProjectUpdate(name="New Name", description="Text"), project.id)
    await test_db.commit()

    assert result.message == "Project successfully updated"
    assert result.result == {"affected": 1}

    response = await service.get(admin, project.id)
    assert response.item.name == "New Name"
    assert response.item.description == "Text"


@pytest.mark.asyncio
async def test_update_missing_project_is_not_found(test_db, admin):
    """Test: UPDATE без затронутых строк - NotFound, а не успех."""
    service = ProjectService(test_db)

    with pytest.raises(NotFoundError, match="Project not found"):
        await service.update(ProjectUpdate(name="Ghost"), uuid.uuid4())


@pytest.mark.asyncio
async def test_suspend_and_activate_project(test_db, admin):
    """Test: полный цикл active -> inactive -> active."""
    project = await make_project(test_db, "Alpha", admin)
    service = ProjectService(test_db)

    suspended = await service.suspend(project.id)
    assert suspended.message == "Project successfully suspended"
    assert (await service.find_entity(admin, project.id)).is_active is False

    activated = await service.activate(project.id)
    assert activated.message == "Project successfully activated"
    assert (await service.find_entity(admin, project.id)).is_active is True


@pytest.mark.asyncio
async def test_suspend_already_suspended_project(test_db, admin):
    """Test: нельзя приостановить уже приостановленный проект."""
    project = await make_project(test_db, "Alpha", admin, is_active=False)
    service = ProjectService(test_db)

    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.suspend(project.id)


@pytest.mark.asyncio
async def test_activate_twice_fails(test_db, admin):
    """Test: повторная активация без приостановки - Invalid request."""
    project = await make_project(test_db, "Alpha", admin, is_active=False)
    service = ProjectService(test_db)

    await service.activate(project.id)

    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.activate(project.id)


@pytest.mark.asyncio
async def test_suspend_from_two_sessions(session_factory):
    """Test: два запроса видят активный проект, но приостановить его удаётся только одному."""
    async with session_factory() as setup:
        owner = await make_user(setup, "admin@example.com", is_admin=True)
        project_id = (await make_project(setup, "Alpha", owner)).id

    async with session_factory() as first, session_factory() as second:
        for session in (first, second):
            assert (await session.get(Project, project_id)).is_active is True

        outcomes = []
        for session in (first, second):
            try:
                await ProjectService(session).suspend(project_id)
                await session.commit()
                outcomes.append("ok")
            except BadRequestError as e:
                await session.rollback()
                outcomes.append(e.message)

    assert outcomes == ["ok", "Invalid request"]


@pytest.mark.asyncio
async def test_set_status_missing_project(test_db):
    """Test: смена статуса несуществующей записи - Invalid request."""
    service = ProjectService(test_db)

    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.activate(uuid.uuid4())


# ============================================================================
# PROJECT PARTICIPANTS
# ============================================================================


@pytest.mark.asyncio
async def test_add_participants_ignores_unknown_ids(test_db, admin, member):
    """Test: несуществующие ID молча пропускаются."""
    project = await make_project(test_db, "Alpha", admin)
    service = ProjectService(test_db)

    response = await service.add_participants(admin, project.id, [member.id, uuid.uuid4()])
    await test_db.commit()

    assert [u.id for u in response.items] == [member.id]
    assert (await service.get(member, project.id)).item.name == "Alpha"


@pytest.mark.asyncio
async def test_add_participants_no_duplicates(test_db, admin, member):
    """Test: повторное добавление не создаёт дубликатов."""
    project = await make_project(test_db, "Alpha", admin, participants=[member])
    service = ProjectService(test_db)

    response = await service.add_participants(admin, project.id, [member.id, member.id])
    await test_db.commit()

    assert [u.id for u in response.items] == [member.id]
    participants = await service.project_repo.load_participants(project)
    assert [u.id for u in participants] == [member.id]


@pytest.mark.asyncio
async def test_add_participants_to_suspended_project(test_db, admin, member):
    """Test: в приостановленный проект участников не добавляем."""
    project = await make_project(test_db, "Alpha", admin, is_active=False)
    service = ProjectService(test_db)

    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.add_participants(admin, project.id, [member.id])


@pytest.mark.asyncio
async def test_add_participants_to_hidden_project(test_db, admin, member):
    """Test: невидимый проект - NotFound."""
    project = await make_project(test_db, "Alpha", admin)
    service = ProjectService(test_db)

    with pytest.raises(NotFoundError):
        await service.add_participants(member, project.id, [member.id])


@pytest.mark.asyncio
async def test_remove_participants(test_db, admin, member, outsider):
    """Test: удалённый участник теряет доступ к проекту."""
    project = await make_project(test_db, "Alpha", admin, participants=[member, outsider])
    service = ProjectService(test_db)

    await service.remove_participants(admin, project.id, [member.id])
    await test_db.commit()

    assert await service.find_entity(member, project.id) is None
    assert await service.find_entity(outsider, project.id) is not None


# ============================================================================
# USER SERVICE
# ============================================================================


@pytest.mark.asyncio
async def test_create_user(test_db):
    """Test: создание пользователя."""
    service = UserService(test_db)

    result = await service.create(
        UserCreate(email="new@example.com", first_name="New", last_name="User")
    )

    assert result.message == "User successfully created"
    user = await service.get_by_id(uuid.UUID(result.result["id"]))
    assert user.is_active is True
    assert user.is_admin is False


@pytest.mark.asyncio
async def test_create_user_duplicate_email(test_db, member):
    """Test: ошибка БД (unique email) превращается в BadRequest с фиксированным текстом."""
    service = UserService(test_db)

    with pytest.raises(BadRequestError, match="An error occurred while creating user"):
        await service.create(
            UserCreate(email="member@example.com", first_name="Copy", last_name="Cat")
        )


@pytest.mark.asyncio
async def test_update_user_duplicate_email(test_db, admin, member):
    """Test: ошибка БД при UPDATE тоже превращается в BadRequest."""
    service = UserService(test_db)
    member_id = member.id

    with pytest.raises(BadRequestError, match="An error occurred while updating user"):
        await service.update(
            UserUpdate(email="admin@example.com", first_name="Copy", last_name="Cat"),
            member_id,
        )


@pytest.mark.asyncio
async def test_block_and_unblock_user(test_db, member):
    """Test: блокировка и разблокировка пользователя."""
    service = UserService(test_db)
    user_id = member.id

    assert (await service.block(user_id)).message == "User successfully blocked"
    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.block(user_id)

    assert (await service.unblock(user_id)).message == "User successfully unblocked"
    with pytest.raises(BadRequestError, match="Invalid request"):
        await service.unblock(user_id)


@pytest.mark.asyncio
async def test_member_sees_only_self(test_db, admin, member):
    """Test: обычный пользователь видит только себя."""
    service = UserService(test_db)

    assert [u.email for u in (await service.get_all(member)).items] == ["member@example.com"]
    with pytest.raises(NotFoundError, match="User not found"):
        await service.get(member, admin.id)


# ============================================================================
# TASK SERVICE
# ============================================================================


@pytest.mark.asyncio
async def test_create_task(test_db, admin, member):
    """Test: создание задачи в видимом проекте."""
    project = await make_project(test_db, "Alpha", admin, participants=[member])
    service = TaskService(test_db)

    result = await service.create(
        TaskCreate(**task_payload(project.id, member.id, admin.id)), member
    )
    await test_db.commit()

    assert result.message == "Task successfully created"
    task = (await service.get(member, uuid.UUID(result.result["id"]))).item
    assert task.priority == TaskPriority.HIGH
    assert task.executor.id == member.id
    assert task.checker.id == admin.id


@pytest.mark.asyncio
async def test_create_task_in_hidden_project(test_db, admin, member):
    """Test: задачу нельзя создать в невидимом проекте."""
    project = await make_project(test_db, "Alpha", admin)
    service = TaskService(test_db)

    with pytest.raises(NotFoundError, match="Project not found"):
        await service.create(TaskCreate(**task_payload(project.id, member.id, admin.id)), member)


@pytest.mark.asyncio
async def test_create_task_unknown_executor(test_db, admin):
    """Test: исполнитель должен существовать."""
    project = await make_project(test_db, "Alpha", admin)
    service = TaskService(test_db)

    with pytest.raises(NotFoundError, match="User not found"):
        await service.create(TaskCreate(**task_payload(project.id, uuid.uuid4(), admin.id)), admin)


@pytest.mark.asyncio
async def test_update_task(test_db, admin, member):
    """Test: обновление задачи и проверка видимости."""
    project = await make_project(test_db, "Alpha", admin, participants=[member])
    service = TaskService(test_db)
    created = await service.create(TaskCreate(**task_payload(project.id, member.id, admin.id)), admin)
    task_id = uuid.UUID(created.result["id"])

    payload = task_payload(project.id, admin.id, member.id, name="Renamed", estimated_time=90)
    payload.pop("project_id")
    result = await service.update(TaskUpdate(**payload), task_id, member)

    assert result.message == "Task successfully updated"
    task = (await service.get(admin, task_id)).item
    assert task.name == "Renamed"
    assert task.estimated_time == 90
    assert task.executor.id == admin.id


@pytest.mark.asyncio
async def test_update_hidden_task(test_db, admin, member, outsider):
    """Test: невидимую задачу обновить нельзя."""
    project = await make_project(test_db, "Alpha", admin, participants=[member])
    service = TaskService(test_db)
    created = await service.create(TaskCreate(**task_payload(project.id, member.id, admin.id)), admin)

    payload = task_payload(project.id, member.id, admin.id)
    payload.pop("project_id")
    with pytest.raises(NotFoundError, match="Task not found"):
        await service.update(TaskUpdate(**payload), uuid.UUID(created.result["id"]), outsider)


@pytest.mark.asyncio
async def test_get_stored_task_outside_input_rules(test_db, admin):
    """Test: сохранённая задача вне правил входа (time_end < time_start) всё равно отдаётся."""
    project = await make_project(test_db, "Alpha", admin)
    task = Task(
        name="Imported",
        description="",
        priority=TaskPriority.LOW,
        estimated_time=MAX_ESTIMATED_TIME + 1,
        project_id=project.id,
        executor_id=admin.id,
        checker_id=admin.id,
        time_start=datetime(2026, 1, 18, 10, 0, 0),
        time_end=datetime(2026, 1, 18, 9, 0, 0),
    )
    test_db.add(task)
    await test_db.commit()

    item = (await TaskService(test_db).get(admin, task.id)).item

    assert item.estimated_time == MAX_ESTIMATED_TIME + 1
    assert item.description == ""
    assert item.model_dump(mode="json")["time_end"] == "2026-01-18 09:00:00"


@pytest.mark.asyncio
async def test_user_tracked_time(test_db, admin, member):
    """Test: учёт времени - сумма интервалов и оценок по задачам исполнителя."""
    project = await make_project(test_db, "Alpha", admin, participants=[member])
    service = TaskService(test_db)

    intervals = [
        ("2026-01-18 09:00:00", "2026-01-18 10:30:00"),  # 5400 s
        ("2026-01-19 14:00:00", "2026-01-19 15:00:00"),  # 3600 s
        (None, None),
    ]
    for i, (start, end) in enumerate(intervals):
        await service.create(
            TaskCreate(
                **task_payload(
                    project.id, member.id, admin.id,
                    name=f"Task {i}", estimated_time=100, time_start=start, time_end=end,
                )
            ),
            admin,
        )
    # Чужая задача не учитывается
    await service.create(TaskCreate(**task_payload(project.id, admin.id, member.id)), admin)

    summary = (await service.get_user_tracked_time(member.id)).item

    assert summary.user_id == member.id
    assert summary.tasks_count == 3
    assert summary.tracked_tasks == 2
    assert summary.tracked_seconds == 9000
    assert summary.estimated_time == 300


def test_task_time_must_be_19_characters():
    """Test: время только в формате YYYY-MM-DD HH:MM:SS."""
    ids = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    task = TaskCreate(**task_payload(*ids, time_start="2026-01-18 09:00:00"))
    assert task.time_start == datetime(2026, 1, 18, 9, 0, 0)

    with pytest.raises(ValueError):
        TaskCreate(**task_payload(*ids, time_start="2026-01-18T09:00"))

    with pytest.raises(ValueError):
        TaskCreate(
            **task_payload(
                *ids, time_start="2026-01-18 10:00:00", time_end="2026-01-18 09:00:00"
            )
        )


def test_task_estimated_time_bounds():
    """Test: estimated_time от 1 до 4294967295."""
    ids = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    assert TaskCreate(**task_payload(*ids, estimated_time=4294967295)).estimated_time == 4294967295
    with pytest.raises(ValueError):
        TaskCreate(**task_payload(*ids, estimated_time=4294967296))
    with pytest.raises(ValueError):
        TaskCreate(**task_payload(*ids, estimated_time=0))
