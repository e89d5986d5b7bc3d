from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AuthResult:
    """Результат аутентификации пользователя."""
    success: bool
    user_data: dict | None = None
    error_message: str = ""
    result_code: str = "ok"  # ok|invalid|forbidden|error|not_configured
