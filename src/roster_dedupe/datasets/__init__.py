from roster_dedupe.datasets.profiles import CLASS_TYPES, ROSTER_COLUMNS, SAMPLE_ROSTER
from roster_dedupe.datasets.reference import ReferenceRosterGenerator

__all__ = ["CLASS_TYPES", "ROSTER_COLUMNS", "SAMPLE_ROSTER", "ReferenceRosterGenerator"]
