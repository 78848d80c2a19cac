from customer_counts.core.counts import CountsAggregator
from customer_counts.core.enricher import ReminderEnricher
from customer_counts.core.save_reconciler import SaveReconciler
from customer_counts.core.scratch_store import EditScratchStore
from customer_counts.core.screen import CustomerCountScreen
from customer_counts.core.view_state import ViewState

__all__ = [
    "CustomerCountScreen",
    "ViewState",
    "CountsAggregator",
    "ReminderEnricher",
    "EditScratchStore",
    "SaveReconciler",
]
