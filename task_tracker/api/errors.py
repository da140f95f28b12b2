"""
Обработчики ошибок (Exception Handlers) для API.

Как это работает:
1. Сервис или dependency выбрасывает APIError (NotFound, BadRequest, ...)
2. FastAPI ищет подходящий handler для этого типа исключения
3. Handler преобразует исключение в HTTP ответ единого формата ErrorResponse
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import APIError
from ..core.logging import get_logger
from ..schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    """Собрать JSONResponse в едином формате ошибки."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Обработчик для наших ошибок (APIError и наследники)."""
    logger.warning(
        f"API Error: {exc.code} - {exc.message}",
        extra={"path": request.url.path, "status": exc.status_code},
    )

    details = None
    if exc.details:
        details = [ErrorDetail(field=d["field"], message=d["message"]) for d in exc.details]

    return error_response(exc.status_code, exc.code, exc.message, details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Обработчик для ошибок валидации Pydantic (422).

    Pydantic:  {"detail": [{"loc": ["body", "name"], "msg": "..."}]}
    Наш формат: {"error": {"code": "VALIDATION_ERROR", "details": [{"field": "name", ...}]}}
    """
    logger.warning(f"Validation Error: {exc.errors()}", extra={"path": request.url.path})

    details = []
    for error in exc.errors():
        # loc - путь к полю: ["body", "name"], ["path", "project_id"]
        field_path = error.get("loc", [])
        field_name = field_path[-1] if field_path else "unknown"
        if len(field_path) > 1 and field_path[0] == "body":
            field_name = ".".join(str(p) for p in field_path[1:])

        details.append(
            ErrorDetail(field=str(field_name), message=error.get("msg", "Validation error"))
        )

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует все error handlers в приложении FastAPI.

    Вызывается из main.py:
        register_error_handlers(app)
    """
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    logger.info("Error handlers registered")
