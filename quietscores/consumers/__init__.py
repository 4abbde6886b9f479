"""Derived analytics and presentation logic over normalized records.

Everything here is pure: no I/O, no mutation of inputs.
"""

from quietscores.consumers.detail_view import DetailView, view_state_for_status
from quietscores.consumers.game_detail import build_game_detail
from quietscores.consumers.linescores import reconstruct_period_scores
from quietscores.consumers.ordering import compare_games, filter_games, live_count, sort_games
from quietscores.consumers.win_probability import normalize_win_probability

__all__ = [
    "DetailView",
    "build_game_detail",
    "compare_games",
    "filter_games",
    "live_count",
    "normalize_win_probability",
    "reconstruct_period_scores",
    "sort_games",
    "view_state_for_status",
]
