"""
Session Context — Authenticated Participant

A SessionContext is the caller-owned slot that says which participant, if any,
is logged in. It wraps any mutable mapping: the Django session in the HTTP
layer, a plain dict in tests or scripts. Every ledger operation receives the
context explicitly, so independent clients hold independent sessions.

Only the participant id is kept. The participant record is re-read from the
database whenever it is needed, so balances seen through the session always
reflect the latest committed trades.
"""

import logging

from trading.models import Participant

logger = logging.getLogger(__name__)

SESSION_KEY = "trading_participant_id"


class SessionContext:

    def __init__(self, store=None):
        self._store = {} if store is None else store

    @classmethod
    def from_request(cls, request):
        return cls(request.session)

    @property
    def participant_id(self):
        return self._store.get(SESSION_KEY)

    @property
    def is_active(self):
        return self.participant_id is not None

    def activate(self, participant):
        self._store[SESSION_KEY] = str(participant.id)

    def clear(self):
        self._store.pop(SESSION_KEY, None)

    def current_participant(self):
        """Returns the logged-in Participant, or None when the session is empty."""
        participant_id = self.participant_id
        if participant_id is None:
            return None

        participant = Participant.objects.filter(id=participant_id).first()
        if participant is None:
            # The id no longer resolves; drop it rather than keep a dangling login.
            logger.warning("Session referenced unknown participant: id=%s", participant_id)
            self.clear()
        return participant
