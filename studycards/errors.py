"""Exceptions raised by the scheduling core and the progress stores."""


class StudyCardsError(Exception):
    """Base class for all studycards errors"""


class InvalidQualityError(StudyCardsError, ValueError):
    """A review quality outside 0-5 reached the scheduler"""

    def __init__(self, quality):
        self.quality = quality
        super().__init__(f"Quality must be an integer between 0 and 5, got {quality!r}")


class StoreUnavailableError(StudyCardsError):
    """The progress store could not complete a read or write"""


class UnknownCardError(StudyCardsError, LookupError):
    """Progress was written for a card the store does not know"""

    def __init__(self, card_id):
        self.card_id = card_id
        super().__init__(f"Unknown card {card_id!r}; register it before recording progress")
