"""
Main Orchestrator for Finança Fácil

This module ties the components together and defines the flows the UI
drives:
1. Startup (load ledger → decide landing page or dashboard)
2. Add (validated draft → append → save)
3. Delete (id → remove → save)
4. Read (ledger → analytics → dashboard summary / history)
5. Insights (ledger → projection → Gemini → text)

DESIGN DECISION: The in-memory list held by LedgerSession is the source
of truth for the running session. Every mutation replaces the list and
then attempts one save. A failed save never undoes the change in memory.

Derived values are recomputed on every read; nothing is cached.
"""

from typing import Optional

from financa_facil.agents import InsightAgent
from financa_facil.analytics import build_dashboard_summary, sorted_by_date_descending
from financa_facil.config import Settings, get_settings
from financa_facil.ledger import IntroPreference, LedgerStore
from financa_facil.logs import configure_logging, get_logger
from financa_facil.models import DashboardSummary, Transaction, TransactionDraft
from financa_facil.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)

logger = get_logger(__name__)


class LedgerSession:
    """
    One user's running session over the ledger.

    Flow:
    1. load() → read the slot once at startup
    2. add_transaction()/delete_transaction() → mutate, then save
    3. summary()/history() → recompute from the current list
    """

    def __init__(
        self,
        store: LedgerStore,
        intro: IntroPreference,
        insight_agent: Optional[InsightAgent] = None,
        recent_limit: int = 5,
    ):
        self._store = store
        self._intro = intro
        self._insight_agent = insight_agent
        self._recent_limit = recent_limit
        self._transactions: list[Transaction] = []
        self._loaded = False
        self._last_save_ok = True

    def load(self) -> list[Transaction]:
        """Replace the in-memory ledger with the persisted one."""
        self._transactions = self._store.load()
        self._loaded = True
        logger.info("session_loaded", transaction_count=len(self._transactions))
        return self.transactions

    reload = load

    @property
    def transactions(self) -> list[Transaction]:
        """Collection order, oldest append first. A copy."""
        if not self._loaded:
            self.load()
        return list(self._transactions)

    @property
    def last_save_ok(self) -> bool:
        return self._last_save_ok

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        """
        Append a new transaction and persist the ledger.

        The transaction stays in memory even if the save fails.
        """
        transaction = self._store.append(draft)
        self._transactions = self.transactions + [transaction]
        self._last_save_ok = self._store.save(self._transactions)

        logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            category=transaction.category,
            saved=self._last_save_ok,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Remove a transaction by id and persist the ledger.

        Returns True if something was removed. An unknown id is a no-op,
        but the ledger is still saved.
        """
        before = self.transactions
        self._transactions = LedgerStore.remove(before, transaction_id)
        removed = len(self._transactions) != len(before)
        self._last_save_ok = self._store.save(self._transactions)

        logger.info(
            "transaction_deleted",
            transaction_id=transaction_id,
            removed=removed,
            saved=self._last_save_ok,
        )
        return removed

    def summary(self) -> DashboardSummary:
        return build_dashboard_summary(self.transactions, self._recent_limit)

    def history(self) -> list[Transaction]:
        """All transactions, newest first."""
        return sorted_by_date_descending(self.transactions)

    def should_show_landing(self) -> bool:
        """
        Returning users with data skip the landing page.

        Both conditions are required: an empty ledger always shows it.
        """
        return not (self._intro.is_seen() and len(self.transactions) > 0)

    def enter_app(self) -> None:
        """User left the landing page."""
        self._intro.mark_seen()

    @property
    def insights_available(self) -> bool:
        return self._insight_agent is not None and self._insight_agent.is_available

    async def get_insights(self) -> str:
        """Text analysis of the latest transactions."""
        if self._insight_agent is None:
            self._insight_agent = InsightAgent()
        return await self._insight_agent.generate_insights(self.transactions)


def _build_storage(settings: Settings, use_storage: bool) -> KeyValueStore:
    storage_settings = settings.storage

    if not use_storage or storage_settings.backend == "memory":
        return InMemoryKeyValueStore(quota_bytes=storage_settings.quota_bytes)

    return JsonFileKeyValueStore(
        storage_settings.file_path,
        quota_bytes=storage_settings.quota_bytes,
    )


def create_app_components(
    use_storage: bool = True,
    settings: Optional[Settings] = None,
) -> LedgerSession:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the local storage file.
                    Set to False for an in-memory session (tests, demos).
        settings: Settings to use; defaults to get_settings().

    Returns:
        A loaded LedgerSession
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(
        level=app_settings.log_level,
        json_output=not app_settings.debug_mode,
    )

    storage = _build_storage(settings, use_storage)
    storage_settings = settings.storage

    store = LedgerStore(
        storage,
        key=storage_settings.transactions_key,
        strict_categories=app_settings.strict_categories,
    )
    intro = IntroPreference(storage, key=storage_settings.intro_key)

    session = LedgerSession(
        store=store,
        intro=intro,
        insight_agent=InsightAgent(settings.gemini),
        recent_limit=app_settings.recent_activity_limit,
    )
    session.load()

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        storage_backend=type(storage).__name__,
    )
    return session
