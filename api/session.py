"""In-memory table sessions keyed by signed session tokens."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from core.game import TableState, new_table
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Without max_age only the signature is checked; table expiry is
        left to the store.

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class TableStore:
    """
    Tables held in process memory with a sliding expiry.

    Nothing survives a restart; each save replaces the stored snapshot.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._tables: dict[str, tuple[TableState, datetime]] = {}

    async def get(self, token: str) -> TableState | None:
        """Get the table for a session token."""
        entry = self._tables.get(token)
        if entry is None:
            return None

        table, expiry = entry
        if expiry < datetime.now():
            await self.delete(token)
            return None
        return table

    async def set(self, token: str, table: TableState) -> None:
        """Store a table snapshot and refresh its expiry."""
        expiry = datetime.now() + timedelta(seconds=self._ttl)
        self._tables[token] = (table, expiry)

    async def delete(self, token: str) -> None:
        """Forget a session."""
        self._tables.pop(token, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [tok for tok, (_, expiry) in self._tables.items() if expiry < now]
        for tok in expired:
            del self._tables[tok]
        if expired:
            logger.info("Expired %d table sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._tables)


_table_store: TableStore | None = None


def get_table_store() -> TableStore:
    """Get or create the table store."""
    global _table_store
    if _table_store is None:
        _table_store = TableStore()
    return _table_store


def default_table() -> TableState:
    """A new table using the configured defaults."""
    table_config = config.table
    rules = RuleSet(
        num_decks=table_config.num_decks,
        min_bet=table_config.min_bet,
        max_bet=table_config.max_bet,
        kelly_fraction=table_config.kelly_fraction,
        blackjack_payout=table_config.blackjack_payout,
    )
    return new_table(
        bankroll=Decimal(table_config.initial_bankroll),
        bet=table_config.default_bet,
        rules=rules,
    )


async def create_session(table: TableState | None = None) -> str:
    """Open a session and return its signed token."""
    store = get_table_store()
    await store.cleanup_expired()
    token = get_session_signer().sign(str(uuid4()))
    await store.set(token, table or default_table())
    return token


def extract_session_id(token: str) -> str | None:
    """Extract the raw session ID from a signed token."""
    return get_session_signer().unsign(token)
