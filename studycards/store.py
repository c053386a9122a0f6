"""Progress store contract and reference adapters.

Callers must serialize reviews of the same (user, card) pair: the stores
offer plain read and write operations with no compare-and-swap, so two
in-flight gradings of one card would lose an update.
"""

import logging
from typing import Dict, Iterable, Optional, Protocol, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from studycards import crud
from studycards.errors import StoreUnavailableError, UnknownCardError
from studycards.schemas import Card, CardMemoryState

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    """Durable per-user, per-card memory state"""

    def get_progress(self, user_id: str, card_id: str) -> Optional[CardMemoryState]:
        ...

    def put_progress(self, user_id: str, card_id: str, state: CardMemoryState) -> None:
        ...

    def delete_progress(self, user_id: str, card_id: str) -> bool:
        ...

    def list_progress(self, user_id: str, course_id: str) -> Dict[str, CardMemoryState]:
        ...


class InMemoryProgressStore:
    """Dict-backed store for tests and embedding"""

    def __init__(self, cards: Iterable[Card] = ()):
        self._states: Dict[Tuple[str, str], CardMemoryState] = {}
        self._course_of: Dict[str, str] = {}
        self.register_cards(cards)

    def register_cards(self, cards: Iterable[Card]) -> None:
        """Record which course each card belongs to, for list_progress"""
        for card in cards:
            self._course_of[card.id] = card.course_id

    def get_progress(self, user_id, card_id):
        return self._states.get((user_id, card_id))

    def put_progress(self, user_id, card_id, state):
        # Unregistered cards would never show up in list_progress
        if card_id not in self._course_of:
            raise UnknownCardError(card_id)
        self._states[(user_id, card_id)] = state

    def delete_progress(self, user_id, card_id):
        return self._states.pop((user_id, card_id), None) is not None

    def list_progress(self, user_id, course_id):
        return {
            card_id: state
            for (owner, card_id), state in self._states.items()
            if owner == user_id and self._course_of.get(card_id) == course_id
        }


class SqlAlchemyProgressStore:
    """Store backed by the flashcards and user_flashcard_progress tables"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _run(self, action: str, operation):
        db = self.session_factory()
        try:
            return operation(db)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Progress store failed to %s: %s", action, e)
            raise StoreUnavailableError(f"Could not {action}: {e}") from e
        finally:
            db.close()

    def get_progress(self, user_id, card_id):
        def operation(db):
            row = crud.get_progress(db, user_id, card_id)
            return CardMemoryState.model_validate(row) if row else None

        return self._run("read progress", operation)

    def put_progress(self, user_id, card_id, state):
        logger.debug("Writing progress for user %s card %s", user_id, card_id)

        def operation(db):
            if crud.get_card(db, card_id) is None:
                raise UnknownCardError(card_id)
            crud.upsert_progress(db, user_id, card_id, state)

        self._run("write progress", operation)

    def delete_progress(self, user_id, card_id):
        logger.debug("Deleting progress for user %s card %s", user_id, card_id)
        return self._run("delete progress", lambda db: crud.delete_progress(db, user_id, card_id))

    def list_progress(self, user_id, course_id):
        def operation(db):
            rows = crud.list_progress(db, user_id, course_id)
            return {card_id: CardMemoryState.model_validate(row) for card_id, row in rows.items()}

        return self._run("list progress", operation)

    def add_cards(self, cards: Iterable[Card]) -> int:
        """Load externally authored cards so course queries can find them"""
        return len(self._run("save cards", lambda db: crud.add_cards(db, cards)))

    def get_course_cards(self, course_id: str):
        def operation(db):
            return [Card.model_validate(row) for row in crud.get_course_cards(db, course_id)]

        return self._run("read cards", operation)
