import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .ad_utils import split_group_dns

MembershipStrategy = Literal["in_chain", "direct", "detect"]


class Settings(BaseSettings):
    # AD
    ad_dc_short: str = Field("", alias="AD_DC_SHORT")
    ad_domain: str = Field("", alias="AD_DOMAIN")
    ad_port: int = Field(636, alias="AD_PORT")
    ad_use_ssl: bool = Field(True, alias="AD_USE_SSL")
    ad_starttls: bool = Field(False, alias="AD_STARTTLS")
    ad_bind_username: str = Field("", alias="AD_BIND_USERNAME")
    ad_bind_password: str = Field("", alias="AD_BIND_PASSWORD")

    # AD TLS validation (опционально)
    ad_tls_validate: bool = Field(False, alias="AD_TLS_VALIDATE")
    ad_ca_pem: str = Field("", alias="AD_CA_PEM")

    ad_connect_timeout_s: float = Field(5.0, gt=0, le=120, alias="AD_CONNECT_TIMEOUT_S")
    ad_receive_timeout_s: float = Field(10.0, gt=0, le=600, alias="AD_RECEIVE_TIMEOUT_S")

    # Авторизация
    ad_allowed_group_dns: str = Field("", alias="AD_ALLOWED_GROUP_DNS")  # ';' separated
    membership_strategy: MembershipStrategy = Field("in_chain", alias="MEMBERSHIP_STRATEGY")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str = Field("", alias="LOG_FILE")

    class Config:
        populate_by_name = True

    @field_validator("ad_dc_short", "ad_domain", "ad_bind_username")
    @classmethod
    def _strip(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("ad_domain")
    @classmethod
    def _validate_domain(cls, v: str) -> str:
        s = (v or "").strip().lower()
        if not s:
            return s
        if s[-1] in ".,;":
            raise ValueError("Имя домена не должно оканчиваться на точку/запятую/точку с запятой.")
        for lab in s.split("."):
            if not lab:
                raise ValueError("Некорректное имя домена: пустая часть между точками.")
            if not re.fullmatch(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?", lab):
                raise ValueError(f"Некорректное имя домена: недопустимые символы в части '{lab}'.")
        return s

    @property
    def allowed_group_dns(self) -> list[str]:
        return split_group_dns(self.ad_allowed_group_dns)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
