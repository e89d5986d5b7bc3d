"""Tests for search request/response types"""
import pytest
from ldap3 import BASE, LEVEL, SUBTREE

from ad_membership.ad.search import Referral, SearchOptions, SearchScope
from ad_membership.ad.filters import in_chain


def test_referral_ldap_url():
    ref = Referral("ldap://dc2.partb.net/CN=Bob,OU=Eng,DC=PartitionB,DC=Net")
    assert ref.host == "dc2.partb.net"
    assert ref.port is None
    assert ref.use_ssl is False
    assert ref.dn == "CN=Bob,OU=Eng,DC=PartitionB,DC=Net"


def test_referral_ldaps_url_with_port_and_escapes():
    ref = Referral("ldaps://dc2.partb.net:3269/CN=Bob%20Smith,DC=PartitionB,DC=Net")
    assert ref.host == "dc2.partb.net"
    assert ref.port == 3269
    assert ref.use_ssl is True
    assert ref.dn == "CN=Bob Smith,DC=PartitionB,DC=Net"


def test_referral_bare_dn():
    ref = Referral("CN=Bob,OU=Eng,DC=PartitionB,DC=Net")
    assert ref.host == ""
    assert ref.port is None
    assert ref.dn == "CN=Bob,OU=Eng,DC=PartitionB,DC=Net"


@pytest.mark.parametrize(
    "scope, expected",
    [(SearchScope.BASE, BASE), (SearchScope.LEVEL, LEVEL), (SearchScope.SUBTREE, SUBTREE)],
)
def test_scope_maps_to_ldap3(scope, expected):
    assert scope.ldap3 == expected


def test_options_defaults():
    opts = SearchOptions(filter=in_chain("CN=G,DC=x"), base="CN=Bob,DC=x")
    assert opts.scope is SearchScope.BASE
    assert opts.return_referrals is True
    assert opts.attributes == ["dn"]
    assert opts.target is None
