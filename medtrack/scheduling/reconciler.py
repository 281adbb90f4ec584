"""
Taken-state reconciliation.

A medication is taken for a day iff a log for it falls inside that day's
window. Callers pass only the logs of the day being rendered.
"""

from typing import Any, Iterable, List, Optional

from .data_types import MedicationView, TakenState


def find_log(logs: Iterable[Any], medication_id: Any) -> Optional[Any]:
    """First log recorded for ``medication_id``, if any."""
    wanted = str(medication_id)
    for log in logs:
        if str(log.medication_id) == wanted:
            return log
    return None


def taken_state(logs_for_day: Iterable[Any], medication_id: Any) -> TakenState:
    if find_log(logs_for_day, medication_id) is None:
        return TakenState.NOT_TAKEN
    return TakenState.TAKEN


def reconcile(medication: Any, logs_for_day: Iterable[Any]) -> MedicationView:
    """Merge ``medication`` with its log for the day into a display record."""
    log = find_log(logs_for_day, medication.medication_id)
    return MedicationView(
        medication_id=medication.medication_id,
        name=medication.name,
        time=medication.time,
        person_name=getattr(medication, 'person_name', None),
        dosage=getattr(medication, 'dosage', None),
        frequency=getattr(medication, 'frequency', None),
        notes=getattr(medication, 'notes', None),
        days_needed=getattr(medication, 'days_needed', None),
        start_date=getattr(medication, 'start_date', None),
        end_date=getattr(medication, 'end_date', None),
        taken=log is not None,
        taken_at=getattr(log, 'taken_at', None),
        marked_by=getattr(log, 'marked_by', None),
    )


def reconcile_all(medications: Iterable[Any], logs_for_day: Iterable[Any]) -> List[MedicationView]:
    logs = list(logs_for_day)
    return [reconcile(medication, logs) for medication in medications]
