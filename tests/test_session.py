import pytest

from safespace.controllers.layout import DASHBOARD_ITEM, NAV_ITEMS, nav_for, sign_out
from safespace.controllers.session import SessionContext
from safespace.core.security import InvalidSessionToken, create_access_token, decode_access_token


def test_token_round_trip():
    token = create_access_token("user-42")
    assert decode_access_token(token) == "user-42"


def test_expired_or_forged_tokens_are_rejected():
    with pytest.raises(InvalidSessionToken):
        decode_access_token(create_access_token("user-42", expires_minutes=-1))
    with pytest.raises(InvalidSessionToken):
        SessionContext.acquire("not-a-token")


def test_session_lifecycle(session):
    assert session.is_authenticated
    assert session.user_id == "user-1"

    sign_out(session)

    assert not session.is_authenticated
    assert session.access_token is None


def test_nav_for_anonymous_and_members(anonymous, session, store):
    assert nav_for(anonymous, store) == NAV_ITEMS
    assert nav_for(session, store) == NAV_ITEMS


def test_nav_shows_dashboard_to_verified_professionals(make_session, make_professional, store):
    make_professional("pro-1")
    make_professional("pro-2", status="pending")

    assert nav_for(make_session("pro-1"), store)[-1] == DASHBOARD_ITEM
    assert DASHBOARD_ITEM not in nav_for(make_session("pro-2"), store)


def test_signed_out_professional_loses_dashboard(make_session, make_professional, store):
    make_professional("pro-1")
    session = make_session("pro-1")
    sign_out(session)
    assert nav_for(session, store) == NAV_ITEMS
