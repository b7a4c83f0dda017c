"""
eventcalendar.auth
==================

Админ-гейт календаря.

Администратор один: его пароль — единственный секрет сервера
(settings.ADMIN_PASSWORD). Учётных записей и ролей нет, есть только
админ-флаг в сессии посетителя.

Состояния:
    ANONYMOUS -> AUTHENTICATING -> ADMIN -> ANONYMOUS   (logout)
    ANONYMOUS -> AUTHENTICATING -> ANONYMOUS            (неверный пароль)

Хранилище сессий передаётся гейту как зависимость (SessionBackend), поэтому
его можно заменить (например, в тестах), не трогая логику гейта.

Порядок побочных эффектов при входе: новая сессия (защита от фиксации) ->
админ-флаг -> синхронная запись -> перечитывание из хранилища. Ответ об
успехе возможен только после того, как запись перечитана: иначе клиент,
сразу спросивший /admin/status, может увидеть устаревшее «не админ».
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from django.conf import settings
from django.contrib.sessions.backends.base import SessionBase
from django.utils.crypto import constant_time_compare

from .exceptions import AuthenticationError, DependencyError

logger = logging.getLogger(__name__)

IS_ADMIN_KEY = "is_admin"


class AdminState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    ADMIN = "admin"


@dataclass(frozen=True)
class SessionGrant:
    """Результат успешного входа."""
    session_id: Optional[str]
    is_admin: bool = True


class SessionBackend(Protocol):
    """Возможности хранилища сессий, нужные гейту."""

    @property
    def session_id(self) -> Optional[str]: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def rotate(self) -> None:
        """Выдать сессии новый идентификатор, старый сделать недействительным."""

    def commit(self) -> None:
        """Синхронно записать сессию; ошибка записи — исключение."""

    def reload(self) -> Mapping[str, Any]:
        """Перечитать сессию из хранилища (а не из памяти процесса)."""

    def destroy(self) -> None: ...


class DjangoSessionBackend:
    """SessionBackend поверх `request.session` (django.contrib.sessions)."""

    def __init__(self, session: SessionBase) -> None:
        self._session = session

    @property
    def session_id(self) -> Optional[str]:
        return self._session.session_key

    def get(self, key: str, default: Any = None) -> Any:
        return self._session.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._session[key] = value

    def rotate(self) -> None:
        self._session.cycle_key()

    def commit(self) -> None:
        self._session.save()

    def reload(self) -> Mapping[str, Any]:
        # Новый экземпляр того же движка читает запись из хранилища заново.
        fresh = self._session.__class__(session_key=self._session.session_key)
        return fresh.load()

    def destroy(self) -> None:
        self._session.flush()


class AdminGate:
    """
    Проверка пароля администратора и админ-флага сессии.

    :param secret: пароль администратора (None/"" — не настроен)
    """

    def __init__(self, secret: Optional[str]) -> None:
        self._secret = secret or ""

    def authenticate(self, session: SessionBackend, password: Any) -> SessionGrant:
        """
        Войти как администратор.

        :raises DependencyError: пароль на сервере не настроен или запись сессии
            не подтверждена хранилищем
        :raises AuthenticationError: неверный пароль (сессия не изменяется)
        """
        if not self._secret:
            logger.error("ADMIN_PASSWORD is not configured; admin login is unavailable")
            raise DependencyError("Server configuration error")

        logger.info("admin gate: %s -> %s", AdminState.ANONYMOUS.value, AdminState.AUTHENTICATING.value)
        if not isinstance(password, str) or not constant_time_compare(password, self._secret):
            logger.warning("admin gate: wrong password, back to %s", AdminState.ANONYMOUS.value)
            raise AuthenticationError()

        try:
            session.rotate()
            session.set(IS_ADMIN_KEY, True)
            session.commit()
            stored = session.reload()
        except Exception as exc:
            logger.exception("admin gate: session store failed during login")
            raise DependencyError("Authentication failed") from exc

        if not stored.get(IS_ADMIN_KEY):
            logger.error("admin gate: session write was not acknowledged by the store")
            raise DependencyError("Authentication failed")

        logger.info("admin gate: %s -> %s", AdminState.AUTHENTICATING.value, AdminState.ADMIN.value)
        return SessionGrant(session_id=session.session_id)

    def authorize(self, session: Optional[SessionBackend]) -> bool:
        """True, только если в сессии стоит админ-флаг."""
        if session is None:
            return False
        return bool(session.get(IS_ADMIN_KEY, False))

    def state(self, session: Optional[SessionBackend]) -> AdminState:
        return AdminState.ADMIN if self.authorize(session) else AdminState.ANONYMOUS

    def logout(self, session: SessionBackend) -> None:
        """Уничтожить сессию. Повторный выход — не ошибка."""
        session.destroy()
        logger.info("admin gate: -> %s (logout)", AdminState.ANONYMOUS.value)


def get_admin_gate() -> AdminGate:
    """Гейт с паролем из текущих настроек."""
    return AdminGate(getattr(settings, "ADMIN_PASSWORD", None))


def session_backend(request) -> Optional[SessionBackend]:
    """SessionBackend для запроса (None, если сессии нет)."""
    session = getattr(request, "session", None)
    if session is None:
        return None
    return DjangoSessionBackend(session)


__all__ = [
    "IS_ADMIN_KEY",
    "AdminState",
    "SessionGrant",
    "SessionBackend",
    "DjangoSessionBackend",
    "AdminGate",
    "get_admin_gate",
    "session_backend",
]
