"""Scoreboard built from raw votes: sums and averages only."""
from typing import Any, Dict, Iterable, List, Optional, Sequence

from cardvote.models.participant_model import Participant, ParticipantResult


def build_results(
    participants: Sequence[Participant],
    votes: Iterable[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Tally votes per participant and rank them.

    weightedScore is the sum of intensities of "yes" votes. Ties are broken by
    yes count, then by participant id. Votes for ids outside the roster are
    ignored.
    """
    tallies = {p.id: {"yes": 0, "no": 0, "weighted": 0, "intensity": 0} for p in participants}
    for v in votes:
        tally = tallies.get(v.get("participantId"))
        if tally is None:
            continue
        intensity = int(v.get("intensity", 0))
        tally["intensity"] += intensity
        if v.get("vote") == "yes":
            tally["yes"] += 1
            tally["weighted"] += intensity
        else:
            tally["no"] += 1

    rows: List[ParticipantResult] = []
    for p in participants:
        t = tallies[p.id]
        total = t["yes"] + t["no"]
        rows.append(ParticipantResult(
            **p.model_dump(),
            yesVotes=t["yes"],
            noVotes=t["no"],
            totalVotes=total,
            weightedScore=t["weighted"],
            averageIntensity=round(t["intensity"] / total, 1) if total else 0.0,
            # Half rounds up, matching the scorecard's Math.round
            yesPercentage=int(100 * t["yes"] / total + 0.5) if total else 0,
        ))

    rows.sort(key=lambda r: (-r.weightedScore, -r.yesVotes, r.id))
    for rank, row in enumerate(rows, start=1):
        row.rank = rank

    winner: Optional[ParticipantResult] = None
    if rows and rows[0].weightedScore > 0:
        winner = rows[0]

    return {
        "results": [r.model_dump() for r in rows],
        "winner": winner.model_dump() if winner else None,
    }
