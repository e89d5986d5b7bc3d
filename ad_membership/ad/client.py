from __future__ import annotations

import hashlib
import logging
import os
import ssl
from typing import Any, Optional

from ldap3 import (
    Server,
    Connection,
    ALL,
    SUBTREE,
    NO_ATTRIBUTES,
    Tls,
)
from ldap3.core.exceptions import LDAPException, LDAPStartTLSError

from ..errors import SearchFailed
from .models import ADConfig, ADUser
from .search import Referral, SearchEntry, SearchOptions, SearchResult
from .utils import escape_ldap_filter_value

log = logging.getLogger(__name__)

RESULT_SUCCESS = 0
RESULT_REFERRAL = 10
RESULT_NO_SUCH_OBJECT = 32

# LDAP_CAP_ACTIVE_DIRECTORY_OID, advertised in rootDSE supportedCapabilities.
AD_CAPABILITY_OID = "1.2.840.113556.1.4.800"

# Where materialized CA bundles live; shared between processes.
CA_DIR = "/tmp"


class ADClient:
    @staticmethod
    def _normalize_pem(pem: str) -> str:
        """Normalize PEM text (strip outer whitespace and normalize line endings)."""
        data = (pem or "").strip()
        data = data.replace("\r\n", "\n").replace("\r", "\n")
        return data

    @staticmethod
    def _ensure_ca_file(pem: str) -> str:
        """Materialize CA PEM into a stable file path.

        ldap3.Tls takes ca_certs_file; the PEM is stored under CA_DIR keyed by its
        content hash so several processes reuse the same file.
        """

        data = ADClient._normalize_pem(pem)
        if not data:
            return ""

        if "-----BEGIN CERTIFICATE-----" not in data or "-----END CERTIFICATE-----" not in data:
            raise ValueError("CA PEM не похож на сертификат (ожидается блок BEGIN/END CERTIFICATE)")

        h = hashlib.sha256(data.encode("utf-8")).hexdigest()[:16]
        path = os.path.join(CA_DIR, f"ad_membership_ca_{h}.pem")

        try:
            if os.path.exists(path):
                with open(path, "r", encoding="utf-8") as f:
                    if f.read().strip() == data:
                        return path

            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
                if not data.endswith("\n"):
                    f.write("\n")
            os.chmod(path, 0o600)
        except OSError:
            # Read-only CA_DIR: fall back to the system trust store.
            log.warning("Не удалось сохранить CA PEM в %s", path, exc_info=True)
            return ""

        return path

    def __init__(self, cfg: ADConfig) -> None:
        self.cfg = cfg

        tls_kwargs: dict[str, Any] = {
            "validate": ssl.CERT_REQUIRED if cfg.tls_validate else ssl.CERT_NONE,
        }
        # Custom CA only matters when verification is enabled.
        ca_pem = self._normalize_pem(cfg.ca_pem or "")
        if cfg.tls_validate and ca_pem:
            ca_file = self._ensure_ca_file(ca_pem)
            if ca_file:
                tls_kwargs["ca_certs_file"] = ca_file

        self.tls = Tls(**tls_kwargs)

        self.server = Server(
            host=cfg.host,
            port=cfg.port,
            use_ssl=cfg.use_ssl,
            get_info=ALL,
            tls=self.tls,
            connect_timeout=cfg.connect_timeout_s,
        )

    def _server_for(self, target: Optional[Referral]) -> Server:
        """Server for a referral target.

        The configured TLS policy is never relaxed by the URL scheme: with
        use_ssl the referral host is reached over LDAPS, with starttls the
        connection is upgraded in _conn.
        """
        if target is None or not target.host:
            return self.server
        try:
            port = target.port or self.cfg.port
        except ValueError as e:
            raise SearchFailed(f"Некорректный адрес referral: {target.uri}") from e
        use_ssl = target.use_ssl or self.cfg.use_ssl
        return Server(
            host=target.host,
            port=port,
            use_ssl=use_ssl,
            tls=self.tls,
            connect_timeout=self.cfg.connect_timeout_s,
        )

    def _conn(self, user: str, password: str, server: Server | None = None) -> Connection:
        server = server or self.server
        conn = Connection(
            server,
            user=user,
            password=password,
            auto_bind=False,
            auto_referrals=False,
            receive_timeout=self.cfg.receive_timeout_s,
        )
        conn.open()
        # StartTLS on an LDAPS socket is a protocol error.
        if self.cfg.starttls and not server.ssl:
            if not conn.start_tls():
                conn.unbind()
                raise LDAPStartTLSError(f"StartTLS не выполнен: {server.host}")
        return conn

    def search(self, options: SearchOptions) -> SearchResult:
        """Run a single search with referrals surfaced instead of followed.

        Entries come from searchResEntry responses; referral URIs are collected
        from searchResRef continuations and from a resultCode=referral result.
        noSuchObject on the base is an empty result. Anything else that is not
        success raises SearchFailed.
        """
        attrs = [a for a in options.attributes if a.lower() != "dn"] or [NO_ATTRIBUTES]
        flt = str(options.filter)

        conn: Connection | None = None
        try:
            server = self._server_for(options.target)
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password, server)
            if not conn.bind():
                res = dict(conn.result or {})
                raise SearchFailed(
                    f"Ошибка bind: {res.get('description', 'неизвестная ошибка')}",
                    result=res.get("result"),
                    description=str(res.get("description", "")),
                )

            conn.search(
                search_base=options.base,
                search_filter=flt,
                search_scope=options.scope.ldap3,
                attributes=attrs,
            )
            res = dict(conn.result or {})
            code = res.get("result", RESULT_SUCCESS)
            if code not in (RESULT_SUCCESS, RESULT_REFERRAL, RESULT_NO_SUCH_OBJECT):
                raise SearchFailed(
                    f"Поиск не выполнен: {res.get('description', 'неизвестная ошибка')}",
                    result=code,
                    description=str(res.get("description", "")),
                )

            result = SearchResult()
            for item in conn.response or []:
                kind = item.get("type")
                if kind == "searchResEntry":
                    result.entries.append(
                        SearchEntry(dn=str(item.get("dn") or ""), attributes=dict(item.get("attributes") or {}))
                    )
                elif kind == "searchResRef" and options.return_referrals:
                    result.referrals.extend(Referral(str(u)) for u in (item.get("uri") or []))

            if code == RESULT_REFERRAL and options.return_referrals:
                result.referrals.extend(Referral(str(u)) for u in (res.get("referrals") or []))

            log.debug(
                "search base=%s scope=%s filter=%s target=%s -> %d entries, %d referrals",
                options.base, options.scope.value, flt,
                options.target.uri if options.target else "-",
                len(result.entries), len(result.referrals),
            )
            return result
        except LDAPException as e:
            log.warning("LDAP ошибка при поиске base=%s: %s", options.base, e)
            raise SearchFailed(f"LDAP ошибка: {e}") from e
        finally:
            try:
                if conn:
                    conn.unbind()
            except LDAPException:
                pass

    def is_active_directory(self) -> bool:
        """True when rootDSE advertises the Active Directory capability."""
        conn: Connection | None = None
        try:
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password)
            if not conn.bind():
                res = dict(conn.result or {})
                raise SearchFailed(
                    f"Ошибка bind: {res.get('description', 'неизвестная ошибка')}",
                    result=res.get("result"),
                    description=str(res.get("description", "")),
                )
            info = conn.server.info
            caps = (info.other.get("supportedCapabilities") if info else None) or []
            return AD_CAPABILITY_OID in [str(c) for c in caps]
        except LDAPException as e:
            raise SearchFailed(f"LDAP ошибка: {e}") from e
        finally:
            try:
                if conn:
                    conn.unbind()
            except LDAPException:
                pass

    def find_user_by_login(self, login: str) -> Optional[ADUser]:
        login = (login or "").strip()
        if not login:
            return None
        base = self.cfg.base_dn
        if not base:
            return None

        conn: Connection | None = None
        try:
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password)
            if not conn.bind():
                return None

            safe_login = escape_ldap_filter_value(login)
            if "@" in login:
                flt = f"(userPrincipalName={safe_login})"
            else:
                flt = f"(sAMAccountName={safe_login})"

            attrs = ["distinguishedName", "sAMAccountName", "displayName", "mail", "memberOf"]
            ok = conn.search(
                search_base=base,
                search_filter=f"(&(objectClass=user){flt})",
                search_scope=SUBTREE,
                attributes=attrs,
                size_limit=2,
            )
            if not ok or len(conn.entries) != 1:
                return None

            e = conn.entries[0]
            dn = str(e.distinguishedName)
            sam = str(getattr(e, "sAMAccountName", "") or "")
            display = str(getattr(e, "displayName", "") or "")
            mail = str(getattr(e, "mail", "") or "")
            member_of = [str(x) for x in (getattr(e, "memberOf", []) or [])]
            return ADUser(dn=dn, sam=sam, display_name=display, mail=mail, member_of=member_of)
        except LDAPException:
            log.warning("Не удалось найти пользователя %s в AD", login, exc_info=True)
            return None
        finally:
            try:
                if conn:
                    conn.unbind()
            except LDAPException:
                pass

    def verify_password(self, user_dn: str, password: str) -> bool:
        if not password:
            # Empty password would be an unauthenticated bind and "succeed".
            return False
        conn: Connection | None = None
        try:
            conn = self._conn(user_dn, password)
            return bool(conn.bind())
        except LDAPException:
            return False
        finally:
            try:
                if conn:
                    conn.unbind()
            except LDAPException:
                pass
