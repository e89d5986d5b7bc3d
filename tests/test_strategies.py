"""Tests for the direct strategy and strategy selection"""
import pytest

from ad_membership.validators import (
    ChainMembershipValidator,
    DirectMembershipValidator,
    MembershipValidator,
    build_validator,
)

from fakes import Entry, FakeSearchClient, Group

BOB = "CN=Bob,OU=Eng,DC=Corp,DC=Net"
ADMINS = "CN=Admins,DC=Corp,DC=Net"


def test_direct_matches_member_of_case_insensitively():
    client = FakeSearchClient()
    v = DirectMembershipValidator(client, [Group(ADMINS)])
    assert v.validate(Entry(BOB, member_of=[ADMINS.lower()])) is True
    assert v.validate(Entry(BOB, member_of=["CN=Other,DC=Corp,DC=Net"])) is False
    assert client.calls == []


def test_direct_does_not_see_nested_groups():
    v = DirectMembershipValidator(FakeSearchClient(), [Group(ADMINS)])
    assert v.validate(Entry(BOB)) is False


def test_direct_with_no_groups():
    assert DirectMembershipValidator(FakeSearchClient(), []).validate(Entry(BOB)) is True
    assert DirectMembershipValidator(FakeSearchClient(), []).perform(Entry(BOB)) is True


@pytest.mark.parametrize(
    "strategy, is_ad, expected",
    [
        ("in_chain", False, ChainMembershipValidator),
        ("direct", True, DirectMembershipValidator),
        ("detect", True, ChainMembershipValidator),
        ("detect", False, DirectMembershipValidator),
        (" In_Chain ", True, ChainMembershipValidator),
    ],
)
def test_build_validator(strategy, is_ad, expected):
    v = build_validator(strategy, FakeSearchClient(is_ad=is_ad), [Group(ADMINS)])
    assert type(v) is expected
    assert isinstance(v, MembershipValidator)
    assert v.group_dns == (ADMINS,)


def test_build_validator_unknown_strategy():
    with pytest.raises(ValueError):
        build_validator("recursive", FakeSearchClient(), [])


def test_base_is_abstract():
    with pytest.raises(TypeError):
        MembershipValidator(FakeSearchClient(), [])
