from __future__ import annotations

from ..ad import ADConfig
from ..settings import Settings


def ad_cfg_from_settings(st: Settings) -> ADConfig | None:
    """Build ADConfig from settings; None when AD is not configured."""
    if not st.ad_dc_short or not st.ad_domain or not st.ad_bind_username:
        return None
    return ADConfig(
        dc_short=st.ad_dc_short,
        domain=st.ad_domain,
        port=st.ad_port,
        use_ssl=st.ad_use_ssl,
        starttls=st.ad_starttls,
        bind_username=st.ad_bind_username,
        bind_password=st.ad_bind_password,
        tls_validate=st.ad_tls_validate,
        ca_pem=st.ad_ca_pem or "",
        connect_timeout_s=st.ad_connect_timeout_s,
        receive_timeout_s=st.ad_receive_timeout_s,
    )
