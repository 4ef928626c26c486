"""Coach service - the single entry point handlers use to change the coach book.

Services:
- Depend only on interfaces (stores)
- Run one command to completion before the next
- Leave every displayed list unfiltered once a command finishes
- Return domain models or domain errors
"""

import logging
from datetime import datetime

from canoe.commands import Command, CommandResult
from canoe.commands.base import Clock, show_all
from canoe.domain import Student, Training
from canoe.domain.errors import DomainError
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)


class CoachService:
    """Service for coach book operations."""

    def __init__(
        self,
        store: ModelStore,
        clock: Clock = datetime.now,
        enforce_availability: bool = False,
    ) -> None:
        self._store = store
        self.clock = clock
        self.enforce_availability = enforce_availability

    def list_students(self) -> list[Student]:
        """Return all students."""
        return self._store.list_students()

    def list_trainings(self) -> list[Training]:
        """Return all trainings, earliest first."""
        return self._store.list_trainings()

    def execute(self, command: Command) -> CommandResult:
        """Run a command against the store.

        Raises:
            DomainError: If any precondition of the command fails. The store
                is left unchanged.
        """
        try:
            result = command.execute(self._store)
        except DomainError as error:
            logger.info("%s rejected: %s", type(command).__name__, error)
            raise
        finally:
            show_all(self._store)

        logger.info("%s succeeded: %s", type(command).__name__, result.message)
        for warning in result.warnings:
            logger.warning(warning)
        return result
