from conftest import auth_headers
from cardvote.models.participant_model import Participant
from cardvote.participants import PARTICIPANTS
from cardvote.results import build_results

ROSTER = PARTICIPANTS[:3]


def v(participant_id, vote, intensity):
    return {"participantId": participant_id, "vote": vote, "intensity": intensity}


def by_id(payload):
    return {r["id"]: r for r in payload["results"]}


def test_tally_and_rank():
    votes = [v(1, "yes", 3), v(1, "yes", 2), v(1, "no", 1), v(2, "yes", 3), v(2, "yes", 3)]
    payload = build_results(ROSTER, votes)
    rows = by_id(payload)

    assert rows[1]["yesVotes"] == 2
    assert rows[1]["noVotes"] == 1
    assert rows[1]["totalVotes"] == 3
    assert rows[1]["weightedScore"] == 5
    assert rows[1]["averageIntensity"] == 2.0
    assert rows[1]["yesPercentage"] == 67

    assert rows[2]["weightedScore"] == 6
    assert rows[2]["averageIntensity"] == 3.0
    assert rows[2]["yesPercentage"] == 100

    assert rows[3]["totalVotes"] == 0
    assert rows[3]["averageIntensity"] == 0.0
    assert rows[3]["yesPercentage"] == 0

    assert [r["id"] for r in payload["results"]] == [2, 1, 3]
    assert [r["rank"] for r in payload["results"]] == [1, 2, 3]
    assert payload["winner"]["id"] == 2


def test_yes_percentage_rounds_half_up():
    votes = [v(1, "yes", 1)] + [v(1, "no", 1)] * 7
    assert by_id(build_results(ROSTER, votes))[1]["yesPercentage"] == 13


def test_no_votes_weigh_nothing():
    payload = build_results(ROSTER, [v(1, "no", 3), v(1, "no", 3)])
    assert by_id(payload)[1]["weightedScore"] == 0
    assert payload["winner"] is None


def test_ties_break_on_yes_count_then_id():
    votes = [v(1, "yes", 3), v(2, "yes", 1), v(2, "yes", 2)]
    payload = build_results(ROSTER, votes)
    assert [r["id"] for r in payload["results"]] == [2, 1, 3]

    payload = build_results(ROSTER, [v(3, "yes", 2), v(1, "yes", 2)])
    assert [r["id"] for r in payload["results"]] == [1, 3, 2]


def test_votes_outside_roster_ignored():
    payload = build_results([Participant(id=1, name="Solo", role="x")], [v(9, "yes", 3)])
    assert payload["results"][0]["totalVotes"] == 0
    assert payload["winner"] is None


def test_results_endpoint(client, sign_in):
    for n in range(3):
        headers = auth_headers(sign_in(uid=f"u{n}", email=f"u{n}@card2025.org")["access_token"])
        client.post("/api/votes", json={"participantId": 4, "vote": "yes", "intensity": 3}, headers=headers)
    payload = client.get("/api/results").json()
    assert len(payload["results"]) == 8
    assert payload["winner"]["name"] == "Emily Davis"
    assert payload["winner"]["weightedScore"] == 9


def test_stats_endpoints(client, voter_headers):
    client.post("/api/votes", json={"participantId": 1, "vote": "yes", "intensity": 1}, headers=voter_headers)
    client.post("/api/votes", json={"participantId": 2, "vote": "no", "intensity": 2}, headers=voter_headers)

    stats = client.get("/api/stats").json()
    assert stats["totalUsers"] == 1
    assert stats["totalVotes"] == 2
    assert stats["totalParticipants"] == 8
    assert stats["enabledParticipants"] == 8
    assert stats["voteDistribution"] == [{"_id": "no", "count": 1}, {"_id": "yes", "count": 1}]
    assert stats["participantVoteCount"] == [{"_id": 1, "count": 1}, {"_id": 2, "count": 1}]
    assert client.get("/api/admin/stats").json() == stats
