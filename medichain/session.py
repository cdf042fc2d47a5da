"""
Session Context
===============

Account and authorization state shared by the views that need it.

Both values start empty. The wallet-connection flow sets the account and
the login flow sets the token; nothing else writes them.

Version: 0.1.0
"""

from medichain.logging import bind_context, get_logger

logger = get_logger(__name__)


class SessionContext:
    """Active wallet account and login token."""

    def __init__(self) -> None:
        self._account = ""
        self._token = ""

    @property
    def account(self) -> str:
        return self._account

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_connected(self) -> bool:
        return bool(self._account)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def connect_wallet(self, account: str) -> None:
        """
        Record the account returned by the wallet.

        Args:
            account: First account the wallet exposed

        Raises:
            ValueError: If the wallet returned no account
        """
        if not account:
            raise ValueError("Wallet returned no account")
        self._account = account
        bind_context(account=account)
        logger.info("wallet_connected", account=account)

    def login(self, token: str) -> None:
        """Record the token issued by a successful login."""
        if not token:
            raise ValueError("Login produced an empty token")
        self._token = token
        logger.info("session_authenticated", account=self._account)

    def logout(self) -> None:
        """Forget the token; the wallet account stays connected."""
        self._token = ""
        logger.info("session_logged_out", account=self._account)

    def __repr__(self) -> str:
        return (
            f"SessionContext(account={self._account!r}, "
            f"authenticated={self.is_authenticated})"
        )
