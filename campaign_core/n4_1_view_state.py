# 4- 1- view state

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from campaign_core.n2_1_api_ingestion import FetchError, load_marketing_data

logger = logging.getLogger(__name__)

T = TypeVar("T")

Document = Dict[str, Any]


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    document: Document


@dataclass(frozen=True)
class Failed:
    message: str


ViewState = Union[Loading, Ready, Failed]


def render_state(
        state: ViewState,
        *,
        on_loading: Callable[[], T],
        on_ready: Callable[[Document], T],
        on_failed: Callable[[str], T],
) -> T:
    """Dispatch on every state variant; an unknown variant is a bug."""
    if isinstance(state, Loading):
        return on_loading()
    if isinstance(state, Ready):
        return on_ready(state.document)
    if isinstance(state, Failed):
        return on_failed(state.message)
    raise TypeError(f"Unknown view state: {state!r}")


class ViewAssembler:
    """
    Holds one page's fetched document for the page's lifetime.

    loading -> ready | failed. Both end states stay put until reload().
    Results of a fetch that finishes after dispose(), or after a newer
    reload() started, are discarded.
    """

    def __init__(
            self,
            name: str,
            loader: Callable[[], Document] = load_marketing_data,
            prepare: Optional[Callable[[Document], Document]] = None,
    ):
        self.name = name
        self._loader = loader
        self._prepare = prepare
        self._state: ViewState = Loading()
        self._generation = 0
        self._disposed = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._disposed

    def reload(self) -> ViewState:
        if self._disposed:
            logger.debug("View %s is disposed, ignoring reload", self.name)
            return self._state

        self._generation += 1
        generation = self._generation
        self._state = Loading()

        try:
            document = self._loader()
            if self._prepare is not None:
                document = self._prepare(document)
            outcome: ViewState = Ready(document)
        except FetchError as err:
            logger.error("View %s failed to load: %s", self.name, err)
            outcome = Failed(str(err) or "Failed to load data")

        if self._disposed or generation != self._generation:
            logger.info("Discarding stale result for view %s", self.name)
            return self._state

        self._state = outcome
        return self._state

    def dispose(self) -> None:
        self._disposed = True

    def render(
            self,
            *,
            on_loading: Callable[[], T],
            on_ready: Callable[[Document], T],
            on_failed: Callable[[str], T],
    ) -> T:
        return render_state(
            self._state,
            on_loading=on_loading,
            on_ready=on_ready,
            on_failed=on_failed,
        )
