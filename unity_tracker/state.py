from typing import Callable, Optional
import logging

from .models import FailedState, IdleState, LoadingState, LookupState, SuccessState
from .xrpscan_service import (
    FETCH_FAILED_MESSAGE,
    EmptyInputError,
    LookupFailed,
    XrpscanService,
)


logger = logging.getLogger(__name__)

StateListener = Callable[[LookupState], None]


class LookupWidget:
    """Input state for one lookup widget: the typed address plus the current phase.

    A submission that is overtaken by a newer one is dropped when it resolves,
    so the state always reflects the latest submit.
    """

    def __init__(
        self,
        service: XrpscanService,
        on_change: Optional[StateListener] = None,
    ) -> None:
        self.service = service
        self.on_change = on_change
        self.address = ""
        self.state: LookupState = IdleState()
        self._generation = 0

    def set_address(self, text: str) -> None:
        self.address = text

    async def submit(self) -> LookupState:
        self._generation += 1
        generation = self._generation

        if not self.address.strip():
            self._transition(FailedState(error_message=str(EmptyInputError())))
            return self.state

        address = self.address
        self._transition(LoadingState())
        try:
            account_info = await self.service.fetch_account(address)
        except LookupFailed as exc:
            next_state: LookupState = FailedState(
                error_message=str(exc) or FETCH_FAILED_MESSAGE
            )
        except Exception as exc:
            logger.exception("Unexpected failure looking up %s", address)
            next_state = FailedState(error_message=str(exc) or FETCH_FAILED_MESSAGE)
        else:
            next_state = SuccessState(result=account_info)

        if generation != self._generation:
            logger.debug("Discarding stale lookup result for %s", address)
            return self.state
        self._transition(next_state)
        return self.state

    def _transition(self, state: LookupState) -> None:
        logger.debug("Lookup phase %s -> %s", self.state.phase.value, state.phase.value)
        self.state = state
        if self.on_change is not None:
            self.on_change(state)
