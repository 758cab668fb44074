"""
Identity Module

Login identities for customers and the administrator, with a three-strike
lockout state machine. An Identity never touches Account state; the link
between the two is the shared id/account number enforced by the Registry.
"""

import re
import threading
from enum import Enum

from .errors import InvalidIdentity
from .logging_config import get_logger, log_action

ADMIN_ID = "ADMIN"
MAX_FAILED_ATTEMPTS = 3

_CUSTOMER_ID_PATTERN = re.compile(r'^\d{8}$')
_PIN_PATTERN = re.compile(r'^\d{4,6}$')

logger = get_logger("banking_ledger.identities")


class IdentityState(Enum):
    """Authentication states"""
    ACTIVE = "active"
    LOCKED = "locked"


class Identity:
    """
    Credential holder: an 8-digit customer id or the ADMIN marker plus a pin.

    Three consecutive wrong pins lock the identity; while locked every
    attempt fails without being counted. unlock() always restores it.
    """

    def __init__(self, identity_id: str, pin: str):
        if not isinstance(identity_id, str) or not identity_id.strip():
            raise InvalidIdentity("Identity id cannot be empty.")
        if identity_id != ADMIN_ID and not _CUSTOMER_ID_PATTERN.match(identity_id):
            raise InvalidIdentity(f"Identity id must be an 8-digit account number or '{ADMIN_ID}'.")
        if not isinstance(pin, str) or not _PIN_PATTERN.match(pin):
            raise InvalidIdentity("PIN must be 4-6 digits.")

        self._id = identity_id
        self._pin = pin
        self._failed_attempts = 0
        self._locked = False
        self._lock = threading.RLock()

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_admin(self) -> bool:
        return self._id == ADMIN_ID

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    @property
    def state(self) -> IdentityState:
        return IdentityState.LOCKED if self._locked else IdentityState.ACTIVE

    def authenticate(self, pin: str) -> bool:
        """
        Check a pin against the stored one.

        Returns:
            True on an exact match. A locked identity always returns False
            and its counter is left untouched.
        """
        with self._lock:
            if self._locked:
                log_action(logger, "warning", "Authentication rejected: identity locked",
                           user_id=self._id, action="login_rejected", resource="identity")
                return False

            if pin == self._pin:
                self._failed_attempts = 0
                log_action(logger, "info", "Authentication succeeded",
                           user_id=self._id, action="login_success", resource="identity")
                return True

            self._failed_attempts += 1
            if self._failed_attempts >= MAX_FAILED_ATTEMPTS:
                self._locked = True
                log_action(logger, "warning", "Identity locked after failed attempts",
                           user_id=self._id, action="identity_locked", resource="identity",
                           details={'failed_attempts': self._failed_attempts})
            else:
                log_action(logger, "info", "Authentication failed",
                           user_id=self._id, action="login_failed", resource="identity",
                           details={'failed_attempts': self._failed_attempts})
            return False

    def unlock(self) -> None:
        """Administrative override: back to active with a zero counter"""
        with self._lock:
            self._locked = False
            self._failed_attempts = 0
        log_action(logger, "info", "Identity unlocked",
                   user_id=self._id, action="identity_unlocked", resource="identity")

    def __repr__(self) -> str:
        return (f"Identity(id={self._id!r}, state={self.state.value}, "
                f"failed_attempts={self._failed_attempts})")
