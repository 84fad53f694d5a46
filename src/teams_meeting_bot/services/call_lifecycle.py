"""
Call lifecycle service.

Reads and terminates calls the bot holds, keeping the join guard in step.
"""

import logging

from ..errors import UpstreamError
from ..graph import GraphApiClient, GraphTokenProvider
from ..models import CallState, HangupResult
from ..utils import require_call_id
from .join_guard import JoinGuard

logger = logging.getLogger(__name__)


class CallLifecycleController:
    """Service for querying and hanging up Graph calls."""

    def __init__(
        self,
        graph: GraphApiClient,
        token_provider: GraphTokenProvider,
        guard: JoinGuard,
    ) -> None:
        self.graph = graph
        self.token_provider = token_provider
        self.guard = guard

    @staticmethod
    def _call_path(call_id: str) -> str:
        return f"communications/calls/{call_id}"

    def get_state(self, call_id: str) -> CallState:
        """
        Get the current state of a call.

        Graph removes calls after they end, so a 404 is reported as the
        synthetic state ``not_found_or_ended`` rather than an error.

        Raises:
            InvalidInputError: If call_id is not GUID-shaped
            UpstreamError: For any other Graph failure
        """
        require_call_id(call_id)
        token = self.token_provider.get_token()

        try:
            data = self.graph.get_json(self._call_path(call_id), token)
        except UpstreamError as e:
            if e.is_not_found:
                return CallState.not_found_or_ended(call_id)
            raise

        return CallState.from_dict(data)

    def hangup(self, call_id: str) -> HangupResult:
        """
        Terminate a call and release its guard entry.

        A call Graph no longer knows about counts as already hung up.

        Raises:
            InvalidInputError: If call_id is not GUID-shaped
            UpstreamError: If Graph refuses the delete (guard left untouched)
        """
        require_call_id(call_id)
        token = self.token_provider.get_token()

        already_ended = False
        try:
            self.graph.delete(self._call_path(call_id), token)
        except UpstreamError as e:
            if not e.is_not_found:
                raise
            already_ended = True
            logger.info("Call %s already ended before hangup", call_id)

        self.guard.release_by_call(call_id)
        return HangupResult(call_id=call_id, already_ended=already_ended)
