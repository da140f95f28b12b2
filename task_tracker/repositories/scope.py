"""
Правила видимости записей (scope rules).

Каждый запрос на чтение (список, одна запись, проверка доступа перед
изменением) строится здесь и только здесь:

    query = PROJECT_SCOPE(actor)              # все видимые проекты
    query = PROJECT_SCOPE(actor, project_id)  # один проект (если виден)

Правило:
1. Если передан target_id - только запись с этим id.
2. Администратор видит все записи (в том числе неактивные).
3. Остальные видят только записи, для которых выполняются фрагменты WHERE
   конкретной сущности (активность + участие в проекте).
4. Связанные пользователи (owner / executor / checker) подгружаются
   тем же запросом через LEFT OUTER JOIN.

actor обязан быть загруженным пользователем (см. api/dependencies.py),
None здесь - ошибка программиста.
"""

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, Select, and_, select
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.interfaces import LoaderOption

from ..models import Project, Task, User

# actor -> список условий WHERE для не-администратора
VisibilityPredicate = Callable[[User], Sequence[ColumnElement[bool]]]


def visibility_filters(actor: User, *predicates: VisibilityPredicate) -> list[ColumnElement[bool]]:
    """
    Собрать условия видимости для пользователя.

    Для администратора - пустой список (никаких ограничений).
    Для остальных - объединение фрагментов всех переданных предикатов.
    """
    if actor.is_admin:
        return []
    fragments: list[ColumnElement[bool]] = []
    for predicate in predicates:
        fragments.extend(predicate(actor))
    return fragments


def project_membership(actor: User) -> list[ColumnElement[bool]]:
    """Проект активен и пользователь - его участник."""
    return [
        Project.is_active.is_(True),
        Project.participants.any(User.id == actor.id),
    ]


def task_membership(actor: User) -> list[ColumnElement[bool]]:
    """Задача видна, если виден её проект."""
    return [Task.project.has(and_(*project_membership(actor)))]


def user_self(actor: User) -> list[ColumnElement[bool]]:
    """Обычный пользователь видит только себя (и только если не заблокирован)."""
    return [User.id == actor.id, User.is_active.is_(True)]


@dataclass(frozen=True)
class ScopeRule:
    """
    Построитель запросов с учётом прав пользователя для одной модели.

    Attributes:
        model: Модель SQLAlchemy
        predicate: Условия видимости для не-администратора
        eager: Связи, которые нужно подгрузить тем же запросом
    """

    model: type
    predicate: VisibilityPredicate
    eager: tuple[LoaderOption, ...] = field(default=())

    def __call__(self, actor: User, target_id: uuid.UUID | None = None) -> Select:
        query = select(self.model)

        if target_id is not None:
            query = query.where(self.model.id == target_id)

        filters = visibility_filters(actor, self.predicate)
        if filters:
            query = query.where(*filters)

        # populate_existing - объекты из identity map обновляются данными из БД,
        # иначе после UPDATE мы бы вернули устаревшие значения
        return query.options(*self.eager).execution_options(populate_existing=True)


PROJECT_SCOPE = ScopeRule(
    model=Project,
    predicate=project_membership,
    eager=(joinedload(Project.owner),),
)

TASK_SCOPE = ScopeRule(
    model=Task,
    predicate=task_membership,
    eager=(joinedload(Task.executor), joinedload(Task.checker)),
)

USER_SCOPE = ScopeRule(model=User, predicate=user_self)
