"""
Per-caller Google authorization on top of a credential store
"""
import logging
from typing import Dict, Optional

from src.calendar.calendar_manager import MissingRefreshTokenError
from src.calendar.credential_store import CredentialStore
from utils.validators import CallbackValidator

logger = logging.getLogger(__name__)


class AuthorizationManager:
    """
    Tracks where each caller is in the login flow

    Unauthenticated -> AuthorizationPending (link sent) -> Authorized
    (credential stored) -> Expired (detected when used) -> Unauthenticated.
    """

    def __init__(self, calendar_manager, store: CredentialStore):
        self.calendar_manager = calendar_manager
        self.store = store

    def is_authorized(self, caller_id) -> bool:
        return caller_id in self.store

    def authorization_url(self, caller_id) -> str:
        """Login link whose state blob identifies the caller"""
        return self.calendar_manager.get_authorization_url(CallbackValidator.build_state(caller_id))

    def complete_authorization(self, code: str, state: str) -> str:
        """
        Exchange the callback code and store the credential pair

        Returns:
            The caller id decoded from the state blob
        """
        caller_id = CallbackValidator.parse_state(state)
        if caller_id is None:
            raise ValueError(f"Invalid authorization state: {state!r}")

        tokens = self.calendar_manager.exchange_code(code)
        self.store.put(caller_id, tokens)
        logger.info(f"🔐 Caller {caller_id} authorized")
        return caller_id

    def get_valid_credentials(self, caller_id) -> Optional[Dict]:
        """
        Return a usable credential pair for the caller

        Returns None when the caller has no credential, or when the stored one
        has expired; an expired credential is deleted from the store before
        returning. Any other refresh failure is raised.
        """
        tokens = self.store.get(caller_id)
        if tokens is None:
            return None

        try:
            fresh = self.calendar_manager.refresh_credentials(tokens)
        except MissingRefreshTokenError:
            logger.info(f"⌛ Credential for {caller_id} expired, re-authorization required")
            self.store.delete(caller_id)
            return None

        if fresh != tokens:
            self.store.put(caller_id, fresh)
        return fresh
