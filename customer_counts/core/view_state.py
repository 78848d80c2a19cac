"""Explicit state owned by the customer count screen."""

from dataclasses import dataclass, field
from typing import Optional

from customer_counts.core.scratch_store import EditScratchStore
from customer_counts.schemas.customer_schema import CustomerRecord, RecordId
from customer_counts.schemas.view_schema import CountsSnapshot, SelectionState


@dataclass
class ViewState:
    """
    Everything the UI renders, in one place.

    Passed into the core operations and handed back by every screen entry
    point, so the core can be driven and inspected without a rendering host.
    ``generation`` increases each time the detail view opens or closes;
    async results tagged with an older generation are stale.
    """

    counts: CountsSnapshot = field(default_factory=CountsSnapshot)
    selection: SelectionState = field(default_factory=SelectionState)
    records: list[CustomerRecord] = field(default_factory=list)
    scratch: EditScratchStore = field(default_factory=EditScratchStore)
    loading: bool = False
    counts_busy: bool = False
    saving_ids: set = field(default_factory=set)
    generation: int = 0

    @property
    def detail_open(self) -> bool:
        return self.selection.category is not None

    def index_of(self, record_id: RecordId) -> int:
        for index, record in enumerate(self.records):
            if record.id == record_id:
                return index
        return -1

    def find_record(self, record_id: RecordId) -> Optional[CustomerRecord]:
        index = self.index_of(record_id)
        return self.records[index] if index != -1 else None

    def replace_record(self, record: CustomerRecord) -> bool:
        """Swap in a new copy of one record, keeping every other entry as is."""
        index = self.index_of(record.id)
        if index == -1:
            return False
        records = list(self.records)
        records[index] = record
        self.records = records
        return True

    def is_saving(self, record_id: RecordId) -> bool:
        return record_id in self.saving_ids
