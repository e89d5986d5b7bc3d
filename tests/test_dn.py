"""Tests for DN helpers"""
import pytest
from hypothesis import given, strategies as st, settings

from ad_membership.errors import MalformedDNError
from ad_membership.utils.dn import dn_base_suffix, dn_equal, normalize_dn


@pytest.mark.parametrize(
    "dn, suffix",
    [
        ("CN=Bob,OU=Eng,DC=Corp,DC=Net", "DC=Corp,DC=Net"),
        ("cn=bob,ou=eng,dc=corp,dc=net", "dc=corp,dc=net"),
        ("CN=Bob, OU=Eng, DC=Corp, DC=Net", "DC=Corp, DC=Net"),
        ("DC=Corp,DC=Net", "DC=Corp,DC=Net"),
        ("CN=a\\,DC=fake,OU=x,DC=real,DC=org", "DC=real,DC=org"),
        ("CN=a\\\\,DC=x,DC=y", "DC=x,DC=y"),
        ("CN=a\\\\\\,DC=fake,DC=x,DC=y", "DC=x,DC=y"),
        ("CN=Bob,  dc=corp,DC=net ", "dc=corp,DC=net"),
    ],
)
def test_base_suffix(dn, suffix):
    assert dn_base_suffix(dn) == suffix


@pytest.mark.parametrize("dn", ["", "CN=Bob,OU=Eng", "CN=ADC=x,OU=y", "Bob"])
def test_base_suffix_malformed(dn):
    with pytest.raises(MalformedDNError) as exc:
        dn_base_suffix(dn)
    assert isinstance(exc.value, ValueError)


def test_case_insensitive_equality():
    assert dn_equal("CN=Alice,DC=Example,DC=Com", "cn=alice,dc=example,dc=com")
    assert not dn_equal("CN=Alice,DC=Example,DC=Com", "CN=Alicia,DC=Example,DC=Com")


def test_normalize_strips():
    assert normalize_dn("  CN=X,DC=Y  ") == "cn=x,dc=y"
    assert normalize_dn(None) == ""


@given(dn=st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ=,", max_size=40))
@settings(max_examples=100)
def test_equality_ignores_case(dn):
    assert dn_equal(dn, dn.upper())
    assert dn_equal(dn.lower(), dn)
