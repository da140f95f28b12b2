"""
Исключения приложения.

Сервисы знают только два вида ошибок:
- NotFoundError: запись не существует ИЛИ скрыта от пользователя правилами
  видимости (эти случаи намеренно неразличимы)
- BadRequestError: недопустимый переход статуса или любая ошибка БД

Unauthorized/Forbidden возникают только на границе HTTP (dependencies).
Все ошибки превращаются в единый JSON формат в api/errors.py.
"""

from starlette import status


class APIError(Exception):
    """
    Базовый класс для всех API ошибок.

    Использование:
        raise APIError(code="NOT_FOUND", message="Project not found", status_code=404)
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: list[dict] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """
    Ресурс не найден (404).

    Использование:
        raise NotFoundError("Project")
        # Сообщение: "Project not found"
    """

    def __init__(self, resource: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource} not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class BadRequestError(APIError):
    """Недопустимый запрос или ошибка сохранения (400)."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(code="BAD_REQUEST", message=message)


class UnauthorizedError(APIError):
    """Нет API ключа / пользователя, либо пользователь заблокирован (401)."""

    def __init__(self, message: str):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class ForbiddenError(APIError):
    """Действие доступно только администратору (403)."""

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(
            code="FORBIDDEN",
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
        )
