from __future__ import annotations

import logging

from ...ad import ADClient, ADGroup
from ...errors import MembershipError
from ...validators import build_validator
from ..ad import ad_cfg_from_settings
from .backend import AuthResult

log = logging.getLogger(__name__)


def authenticate(username: str, password: str, settings, client: ADClient | None = None) -> AuthResult:
    """Аутентификация пользователя через Active Directory.

    1) найти DN по логину (сервисным bind)
    2) проверить пароль (user bind)
    3) проверить членство в разрешённых группах (с учётом вложенности)

    Любая ошибка при проверке членства означает отказ.

    Args:
        username: Имя пользователя
        password: Пароль
        settings: Настройки приложения
        client: Готовый ADClient (по умолчанию создаётся из настроек)

    Returns:
        AuthResult: Результат аутентификации
    """
    if client is None:
        cfg = ad_cfg_from_settings(settings)
        if not cfg:
            return AuthResult(
                success=False,
                error_message="AD не настроен (проверьте настройки).",
                result_code="not_configured",
            )
        client = ADClient(cfg)

    u = client.find_user_by_login(username)
    if not u:
        return AuthResult(success=False, error_message="Неверный логин или пароль.", result_code="invalid")

    if not client.verify_password(u.dn, password):
        return AuthResult(success=False, error_message="Неверный логин или пароль.", result_code="invalid")

    groups = [ADGroup(dn=dn) for dn in settings.allowed_group_dns]
    try:
        validator = build_validator(settings.membership_strategy, client, groups)
        allowed = validator.validate(u)
    except MembershipError:
        log.warning("Не удалось проверить членство в группах для %s", u.dn, exc_info=True)
        return AuthResult(
            success=False,
            error_message="Не удалось проверить членство в группах.",
            result_code="error",
        )

    if not allowed:
        log.info("Доступ запрещён для %s: нет членства в разрешённых группах", u.dn)
        return AuthResult(
            success=False,
            error_message="Доступ запрещён: пользователь не входит в разрешённые группы.",
            result_code="forbidden",
        )

    user_data = {
        "username": u.sam or username,
        "display_name": u.display_name or u.sam or username,
        "dn": u.dn,
        "mail": u.mail,
        "auth": "ad",
        "groups": list(u.member_of),
    }
    return AuthResult(success=True, user_data=user_data)
