"""Settlement builder.

Converts the final scoreboard into ranked payout instructions for the
chain-settlement layer. Pure function: no state is read or written beyond
its arguments.
"""

from __future__ import annotations

from collections.abc import Sequence

from sciencegame.models.state import Player, SettlementEntry


def build_settlement(
    scoreboard: Sequence[Player],
    payout_schedule: Sequence[int] | None = None,
    points_value: int = 1,
) -> list[SettlementEntry]:
    """Build ranked settlement entries.

    Args:
        scoreboard: Players already in scoreboard total order
        payout_schedule: Payout weight per rank (rank 1 first); ranks past
            the end receive 0. If None, payout is proportional to score.
        points_value: Payout weight per point when no schedule is given

    Returns:
        One SettlementEntry per player, rank 1 first

    Raises:
        ValueError: If the scoreboard lists a player twice
    """
    seen: set[str] = set()
    entries: list[SettlementEntry] = []
    for index, player in enumerate(scoreboard):
        if player.player_id in seen:
            raise ValueError(f"Player {player.player_id} appears twice in scoreboard")
        seen.add(player.player_id)

        if payout_schedule is not None:
            payout = payout_schedule[index] if index < len(payout_schedule) else 0
        else:
            payout = player.score * points_value

        entries.append(
            SettlementEntry(
                player_id=player.player_id,
                rank=index + 1,
                score=player.score,
                payout_weight=payout,
            )
        )
    return entries
