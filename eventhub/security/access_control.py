# -*- coding: utf-8 -*-
"""
eventhub/security/access_control.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Проверки доступа, зависящие от данных, а не только от роли.

* Участник работает только со своими попытками: email берется из токена.
* Мероприятием управляют его организатор и администраторы.
* Заявки мероприятия видят и рассматривают также назначенные судьи.
"""

from typing import Optional

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import Role
from eventhub.domain.models import Event
from eventhub.security.security import current_user_id
from eventhub.utils.exceptions import PermissionDeniedError

logger = configure_logger(__name__)

PRIVILEGED_ROLES = {Role.SUPER_ADMIN.value, Role.ADMIN.value}


def is_privileged(current_user: dict) -> bool:
    return current_user.get("role") in PRIVILEGED_ROLES


def resolve_participant_email(
    current_user: dict, requested_email: Optional[str] = None
) -> str:
    """
    Определить email участника для операций с попытками.

    Участник всегда действует от своего email из токена: если в запросе
    указан другой email, доступ запрещается. Организаторы и администраторы
    могут указать любой email.

    Raises:
        PermissionDeniedError: Если email не совпадает или в токене его нет
    """
    token_email = (current_user.get("email") or "").strip().lower()
    requested = requested_email.strip().lower() if requested_email else None

    if current_user.get("role") in (Role.PARTICIPANT.value, Role.JUDGE.value):
        if not token_email:
            raise PermissionDeniedError("Sign in with an email address to take tests")
        if requested and requested != token_email:
            logger.warning(
                f"🚫 Пользователь {current_user.get('sub')} пытался действовать "
                f"от имени {requested}"
            )
            raise PermissionDeniedError(
                "You can only access your own test attempts"
            )
        return token_email

    email = requested or token_email
    if not email:
        raise PermissionDeniedError("Participant email is required")
    return email


def can_manage_event(current_user: dict, event: Event) -> bool:
    if is_privileged(current_user):
        return True
    return (
        current_user.get("role") == Role.ORGANIZER.value
        and current_user_id(current_user) == event.organizer_id
    )


def is_assigned_judge(current_user: dict, event: Event) -> bool:
    if current_user.get("role") != Role.JUDGE.value:
        return False
    user_id = current_user_id(current_user)
    return any(judge.id == user_id for judge in event.judges)


def ensure_can_manage_event(
    current_user: dict, event: Event, detail: str = "Only the event organizer can do this"
) -> None:
    """
    Raises:
        PermissionDeniedError: Если пользователь не организатор мероприятия
    """
    if not can_manage_event(current_user, event):
        raise PermissionDeniedError(detail)


def ensure_can_review_event(current_user: dict, event: Event) -> None:
    """
    Raises:
        PermissionDeniedError: Если пользователь не организатор и не судья мероприятия
    """
    if can_manage_event(current_user, event) or is_assigned_judge(current_user, event):
        return
    raise PermissionDeniedError("Insufficient permissions for this event")
