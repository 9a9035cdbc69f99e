"""
Endpoint tests for ``POST /login.php``.

Tests cover:
- Login success payload shape and values
- Identical error bodies for unknown email and wrong password
- Internal error when characters cannot be listed
- Request dispatch for every request kind
- Ill-formed and unknown requests
- Internal error when the login response cannot be built
"""

from unittest.mock import patch

import pytest

from login_server.api.models import LoginResponse
from login_server.auth.passwords import hash_password
from login_server.db import accounts_repo, community_repo, players_repo
from login_server.db.errors import DatabaseOperationContext, DatabaseReadError
from tests.constants import TEST_EMAIL, TEST_PASSWORD

SESSION_KEYS = {
    "sessionkey",
    "status",
    "lastlogintime",
    "premiumuntil",
    "ispremium",
    "isreturner",
    "returnernotification",
    "showrewardnews",
    "fpstracking",
    "optiontracking",
    "emailcoderequest",
    "tournamentticketpurchasestate",
}

CHARACTER_KEYS = {
    "worldid",
    "name",
    "level",
    "vocation",
    "outfitid",
    "headcolor",
    "torsocolor",
    "legscolor",
    "detailcolor",
    "addonsflags",
    "dailyrewardstate",
    "ismale",
    "tutorial",
    "ishidden",
    "ismaincharacter",
    "istournamentparticipant",
    "remainingdailytournamentplaytime",
}


def _login(client, email=TEST_EMAIL, password=TEST_PASSWORD):
    return client.post("/login.php", json={"type": "login", "email": email, "password": password})


# ============================================================================
# LOGIN
# ============================================================================


@pytest.mark.api
def test_login_success(test_client, db_with_account):
    response = _login(test_client)

    assert response.status_code == 200
    body = response.json()
    session = body["session"]
    assert set(session) == SESSION_KEYS
    assert session["status"] == "active"
    assert session["lastlogintime"] == 200
    assert session["premiumuntil"] > 0
    assert session["ispremium"] is True
    assert session["sessionkey"]

    worlds = body["playdata"]["worlds"]
    assert len(worlds) == 1
    assert worlds[0]["name"] == "Canary"
    assert worlds[0]["externalport"] == 7172
    assert worlds[0]["pvptype"] == "pvp"

    characters = body["playdata"]["characters"]
    assert [set(c) for c in characters] == [CHARACTER_KEYS, CHARACTER_KEYS]
    alpha, bravo = characters
    assert (alpha["name"], alpha["vocation"], alpha["ismale"]) == ("Alpha", "Sorcerer", True)
    assert alpha["dailyrewardstate"] == 0
    assert (bravo["name"], bravo["vocation"], bravo["ismale"]) == ("Bravo", "Elite Knight", False)
    assert bravo["dailyrewardstate"] == 1
    assert bravo["level"] == 20


@pytest.mark.api
def test_login_unknown_email_and_wrong_password_are_identical(test_client, db_with_account):
    unknown = _login(test_client, email="nobody@x.com")
    wrong = _login(test_client, password="wrong")

    assert unknown.status_code == wrong.status_code == 200
    assert unknown.json() == wrong.json() == {
        "errorCode": 3,
        "errorMessage": "Invalid email or password.",
    }


@pytest.mark.api
@pytest.mark.parametrize(
    "payload",
    [
        {"type": "login"},
        {"type": "login", "email": TEST_EMAIL},
        {"type": "login", "password": TEST_PASSWORD},
        {"type": "login", "email": None, "password": TEST_PASSWORD},
        {"type": "login", "email": TEST_EMAIL, "password": None, "stayloggedin": None},
    ],
)
def test_login_missing_fields_is_invalid_credentials(test_client, db_with_account, payload):
    assert test_client.post("/login.php", json=payload).json()["errorCode"] == 3


@pytest.mark.api
def test_login_character_store_unavailable(test_client, db_with_account):
    error = DatabaseReadError(
        context=DatabaseOperationContext(operation="players.list", details="SELECT secret")
    )
    with patch.object(players_repo, "list_characters_by_account", side_effect=error):
        response = _login(test_client)

    assert response.json() == {"errorCode": 1, "errorMessage": "Internal error."}
    assert "SELECT" not in response.text


@pytest.mark.api
def test_login_response_build_failure_is_internal_error(test_client, db_with_account):
    with patch.object(LoginResponse, "from_result", side_effect=ValueError("bad field")):
        response = _login(test_client)

    assert response.status_code == 200
    assert response.json() == {"errorCode": 1, "errorMessage": "Internal error."}


@pytest.mark.api
def test_login_with_very_large_premium_counter(test_client, test_db):
    accounts_repo.create_account(
        "rich@x.com", hash_password(TEST_PASSWORD), premium_days=3_000_000
    )

    response = _login(test_client, email="rich@x.com")

    assert response.status_code == 200
    session = response.json()["session"]
    assert session["ispremium"] is True
    assert session["premiumuntil"] > 3_000_000 * 86400


@pytest.mark.api
def test_login_ignores_stayloggedin(test_client, db_with_account):
    response = test_client.post(
        "/login.php",
        json={
            "type": "login",
            "email": TEST_EMAIL,
            "password": TEST_PASSWORD,
            "stayloggedin": True,
        },
    )

    assert "session" in response.json()


# ============================================================================
# AUXILIARY REQUESTS
# ============================================================================


@pytest.mark.api
def test_boosted_creature_request(test_client):
    community_repo.set_boosted_creature(42)

    response = test_client.post("/login.php", json={"type": "boostedcreature"})

    assert response.json() == {"boostedcreature": True, "raceid": 42}


@pytest.mark.api
def test_cache_info_request(test_client):
    response = test_client.post("/login.php", json={"type": "cacheinfo"})

    assert response.json() == {
        "playersonline": 0,
        "twitchstreams": 1,
        "twitchviewer": 2,
        "gamingyoutubestreams": 3,
        "gamingyoutubeviewer": 4,
    }


@pytest.mark.api
def test_event_schedule_request(test_client):
    body = test_client.post("/login.php", json={"type": "eventschedule"}).json()

    assert len(body["eventlist"]) == 4
    assert set(body["eventlist"][0]) == {
        "name",
        "startdate",
        "enddate",
        "specialevent",
        "displaypriority",
        "isseasonal",
        "description",
        "colorlight",
        "colordark",
    }
    assert body["lastupdatetimestamp"] > 0


# ============================================================================
# MALFORMED REQUESTS
# ============================================================================


@pytest.mark.api
@pytest.mark.parametrize("payload", [{}, {"type": None}, {"type": ""}])
def test_absent_request_type_is_invalid_request(test_client, payload):
    response = test_client.post("/login.php", json=payload)

    assert response.status_code == 200
    assert response.json() == {"errorCode": 1, "errorMessage": "Invalid request."}


@pytest.mark.api
def test_unknown_request_type(test_client):
    response = test_client.post("/login.php", json={"type": "news"})

    assert response.status_code == 200
    assert response.json() == {"errorCode": 1, "errorMessage": "Invalid request."}


@pytest.mark.api
@pytest.mark.parametrize(
    "content",
    [b"not json", b"[]", b'"login"', b'{"type": 5}', b'{"email": ["a"]}', b""],
)
def test_ill_formed_request(test_client, content):
    response = test_client.post(
        "/login.php", content=content, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 200
    assert response.json() == {"errorCode": 1, "errorMessage": "Ill-formed request."}


@pytest.mark.api
def test_get_is_not_routed(test_client):
    assert test_client.get("/login.php").status_code == 405
