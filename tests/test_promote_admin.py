import pytest

from cardvote import promote_admin


@pytest.fixture
def connector(db, monkeypatch):
    class FakeConnector:
        closed = False

        def __init__(self):
            self.db = db

        @classmethod
        def close(cls):
            cls.closed = True

    monkeypatch.setattr(promote_admin, "MongoConnector", FakeConnector)
    return FakeConnector


def test_promote_and_revoke(sign_in, db, connector):
    sign_in()
    assert promote_admin.main(["u1@card2025.org"]) == 0
    assert db["Users"].find_one({"uid": "u1"})["role"] == "admin"
    assert connector.closed

    assert promote_admin.main(["u1@card2025.org", "--revoke"]) == 0
    assert db["Users"].find_one({"uid": "u1"})["role"] == "student"


def test_unknown_email(db, connector):
    assert promote_admin.main(["ghost@card2025.org"]) == 1


def test_promoted_admin_keeps_role_on_next_sign_in(sign_in, db, connector):
    sign_in()
    promote_admin.main(["u1@card2025.org"])
    assert sign_in()["user"]["role"] == "admin"
