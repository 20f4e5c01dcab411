import threading
from datetime import datetime


class DocumentNumberGenerator:
    """
    Generates sequential document numbers in format: PREFIX-YYYY-NNNNNN

    Examples:
        INV-2026-000001
        STU-2026-000042
        FEE-2026-001234

    One sequence is kept per (prefix, year). Numbers are handed out under a
    lock, so two creations never receive the same id.
    """

    def __init__(self):
        self._sequences: dict[tuple[str, int], int] = {}
        self._lock = threading.Lock()

    def generate(self, prefix: str, year: int | None = None) -> str:
        """Generate next document number for given prefix and year."""
        if year is None:
            year = datetime.now().year

        with self._lock:
            last_number = self._sequences.get((prefix, year), 0) + 1
            self._sequences[(prefix, year)] = last_number

        return f"{prefix}-{year}-{last_number:06d}"

    def last_number(self, prefix: str, year: int | None = None) -> int:
        """Last number issued for prefix/year (0 if none yet)."""
        if year is None:
            year = datetime.now().year
        with self._lock:
            return self._sequences.get((prefix, year), 0)
