"""Base class for mode strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from duologue.models.enums import ConversationMode, TerminationReason

if TYPE_CHECKING:
    from duologue.orchestration.coordinator import TurnCoordinator


class ModeStrategy(ABC):
    """Runs one conversation through a :class:`TurnCoordinator`.

    Agent sessions are created inside :meth:`run` and discarded when it
    returns.
    """

    mode: ConversationMode

    @abstractmethod
    async def run(self, coordinator: TurnCoordinator) -> TerminationReason:
        """Drive rounds until the cap or a quit; return why it stopped.

        Raises:
            SetupError: The mode could not start.
        """
        ...
