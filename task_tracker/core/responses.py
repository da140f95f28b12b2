"""
Единые форматы успешных ответов API.

Три формата:
    ListResponse    {"items": [...]}
    EntityResponse  {"item": {...}}
    ActionResponse  {"message": "...", "result": {...}}

Ошибки имеют свой формат (см. schemas.ErrorResponse и api/errors.py).
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

ItemT = TypeVar("ItemT", bound=BaseModel)


class ListResponse(BaseModel, Generic[ItemT]):
    items: list[ItemT]


class EntityResponse(BaseModel, Generic[ItemT]):
    item: ItemT


class ActionResponse(BaseModel):
    """
    Результат действия (create/update/смена статуса).

    result - то, что вернула БД: id новой записи или число затронутых строк.
    """

    message: str
    result: dict[str, Any] | None = None


class ResponseBuilder:
    """
    Оборачивает результаты сервисов в единые форматы ответа.

    Никакой бизнес-логики: ORM объекты конвертируются через read-схему
    (схема должна иметь from_attributes=True).

    Пример:
        ResponseBuilder.list(projects, ProjectResponse)
        ResponseBuilder.entity(project, ProjectResponse)
        ResponseBuilder.action("Project successfully created", {"id": "..."})
    """

    @staticmethod
    def list(items, schema: type[ItemT]) -> ListResponse[ItemT]:
        return ListResponse[schema](items=[schema.model_validate(item) for item in items])

    @staticmethod
    def entity(item, schema: type[ItemT]) -> EntityResponse[ItemT]:
        return EntityResponse[schema](item=schema.model_validate(item))

    @staticmethod
    def action(message: str, result: dict[str, Any] | None = None) -> ActionResponse:
        return ActionResponse(message=message, result=result)
