import enum


class SortBy(enum.Enum):
    TIME = 'time'
    NAME = 'name'
    STATUS = 'status'


class DurationMode(enum.Enum):
    DAYS = 'days'
    RANGE = 'range'


class ChangeTable(enum.Enum):
    MEDICATIONS = 'medications'
    MEDICATION_LOGS = 'medication_logs'


class ChangeEvent(enum.Enum):
    INSERT = 'INSERT'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'
