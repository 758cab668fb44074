"""
Registry Module

In-memory owner of all identities and accounts. Enforces key uniqueness
and the customer identity/account pairing, and exposes lookup and admin
operations. The registry is an explicit object owned by the caller; there
is no module-level instance.
"""

import threading
from typing import Dict, List, Optional

from .accounts import Account, Amount, Clock
from .errors import InvalidArgument
from .identities import Identity
from .logging_config import get_logger, log_action

logger = get_logger("banking_ledger.registry")


class Registry:
    """Identity and account store with atomic joint registration"""

    def __init__(self, clock: Optional[Clock] = None):
        self._identities: Dict[str, Identity] = {}
        self._accounts: Dict[str, Account] = {}
        self._clock = clock
        self._lock = threading.RLock()

    # Registration

    def register_customer(self, identity: Identity, account: Account) -> None:
        """
        Register a customer identity together with its account.

        Both mappings are inserted under one lock, so no caller can observe
        one half without the other.

        Raises:
            InvalidArgument: If either side is missing, the identity is the
                admin, the id does not match the account number, or the key
                is already registered
        """
        if identity is None or account is None:
            raise InvalidArgument("Identity/account cannot be None.")
        if identity.is_admin:
            raise InvalidArgument("Admin cannot be registered as a customer.")
        if identity.id != account.account_number:
            raise InvalidArgument("Identity id must match account number.")

        with self._lock:
            if account.account_number in self._accounts or identity.id in self._identities:
                raise InvalidArgument("Account number already exists.")
            self._identities[identity.id] = identity
            self._accounts[account.account_number] = account

        log_action(logger, "info", "Customer registered",
                   user_id=identity.id, action="customer_registered", resource="registry")

    def register_admin(self, identity: Identity) -> None:
        """Register the admin identity; it has no paired account"""
        if identity is None or not identity.is_admin:
            raise InvalidArgument("Must provide the ADMIN identity.")
        with self._lock:
            self._identities[identity.id] = identity

        log_action(logger, "info", "Admin registered",
                   user_id=identity.id, action="admin_registered", resource="registry")

    def open_customer_account(self, account_number: str, holder_name: str, pin: str,
                              initial_balance: Amount = 0) -> Account:
        """
        Build a customer identity and account and register them jointly.

        Raises:
            InvalidIdentity / InvalidAccount / InvalidAmount: On bad input
            InvalidArgument: If the account number is already registered
        """
        account = Account(account_number, holder_name, initial_balance, clock=self._clock)
        identity = Identity(account_number, pin)
        self.register_customer(identity, account)
        return account

    # Lookup

    def find_identity(self, identity_id: str) -> Optional[Identity]:
        with self._lock:
            return self._identities.get(identity_id)

    def find_account(self, account_number: str) -> Optional[Account]:
        with self._lock:
            return self._accounts.get(account_number)

    def login(self, identity_id: str, pin: str) -> Optional[Identity]:
        """Return the identity when it exists and the pin authenticates"""
        identity = self.find_identity(identity_id)
        if identity is None:
            log_action(logger, "info", "Login for unknown identity",
                       user_id=identity_id, action="login_unknown", resource="registry")
            return None
        return identity if identity.authenticate(pin) else None

    # Admin utilities

    def list_all_accounts(self) -> List[Account]:
        with self._lock:
            return list(self._accounts.values())

    def list_all_identities(self) -> List[Identity]:
        with self._lock:
            return list(self._identities.values())

    def unlock(self, identity_id: str) -> bool:
        """Unlock an identity; returns whether it existed"""
        identity = self.find_identity(identity_id)
        if identity is None:
            return False
        identity.unlock()
        return True
