"""Contractor payroll records stored as JSON documents in a key/value store."""

from __future__ import annotations

import logging

from invoicepatch.core.exceptions import RecordNotFoundError
from invoicepatch.core.protocols import IKeyValueStore
from invoicepatch.models.contractor import ContractorPayrollRecord

logger = logging.getLogger(__name__)


class PayrollRecordRepository:
    """Reads and writes ContractorPayrollRecord through an injected IKeyValueStore."""

    KEY_PREFIX = "payroll:contractor:"

    def __init__(self, store: IKeyValueStore) -> None:
        self._store = store

    def _key(self, contractor_id: str) -> str:
        return f"{self.KEY_PREFIX}{contractor_id}"

    def save(self, record: ContractorPayrollRecord) -> ContractorPayrollRecord:
        self._store.set(self._key(record.contractor_id), record.model_dump_json())
        logger.info(
            "Saved payroll record for contractor %s (%d periods, current=%d)",
            record.contractor_id, len(record.payroll_schedule), record.current_period,
        )
        return record

    def get(self, contractor_id: str) -> ContractorPayrollRecord:
        raw = self._store.get(self._key(contractor_id))
        if raw is None:
            raise RecordNotFoundError(contractor_id)
        return ContractorPayrollRecord.model_validate_json(raw)

    def exists(self, contractor_id: str) -> bool:
        return self._store.get(self._key(contractor_id)) is not None
