"""Game detail view state: preview -> live -> final.

The state comes only from the latest Game.status. Each state has its own
tab set; on a state change a tab that is not valid for the new state is
reset to that state's default. There is no way back out of final.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PREVIEW = "preview"
LIVE = "live"
FINAL = "final"

TABS_BY_STATE: dict[str, tuple[str, ...]] = {
    PREVIEW: ("preview",),
    LIVE: ("gamecast", "boxscore", "play-by-play", "team-stats"),
    FINAL: ("boxscore", "team-stats"),
}

DEFAULT_TAB_BY_STATE = {PREVIEW: "preview", LIVE: "gamecast", FINAL: "boxscore"}
INITIAL_TAB = "gamecast"


def view_state_for_status(status: str | None) -> str:
    if status in ("live", "halftime"):
        return LIVE
    if status == "final":
        return FINAL
    return PREVIEW


def tab_for_state(state: str, active_tab: str | None) -> str:
    """Keep active_tab when the state allows it, else the state's default."""
    if active_tab in TABS_BY_STATE[state]:
        return active_tab
    return DEFAULT_TAB_BY_STATE[state]


@dataclass(frozen=True)
class DetailView:
    """Current state and selected tab of one game's detail view."""

    state: str
    tab: str

    @classmethod
    def initial(cls, status: str | None) -> "DetailView":
        state = view_state_for_status(status)
        return cls(state=state, tab=tab_for_state(state, INITIAL_TAB))

    def on_status(self, status: str | None) -> "DetailView":
        """View after a fetch reporting status.

        A final view stays final whatever later fetches say.
        """
        if self.state == FINAL:
            return self
        state = view_state_for_status(status)
        if state == self.state:
            return self
        logger.debug("[DETAIL] %s -> %s", self.state, state)
        return DetailView(state=state, tab=tab_for_state(state, self.tab))

    def select_tab(self, tab: str) -> "DetailView":
        """Switch tabs; a tab the current state does not offer is ignored."""
        if tab not in TABS_BY_STATE[self.state]:
            return self
        return DetailView(state=self.state, tab=tab)

    @property
    def tabs(self) -> tuple[str, ...]:
        return TABS_BY_STATE[self.state]

    def to_dict(self) -> dict:
        return {"state": self.state, "tab": self.tab, "tabs": list(self.tabs)}
