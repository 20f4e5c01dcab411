from typing import Callable, Generic, Iterator, TypeVar

from pydantic import BaseModel, ConfigDict

from school_office.core.exceptions import NotFoundError


class Record(BaseModel):
    """Base class for stored entities.

    Records are frozen: a change is made by building a copy
    (``model_copy(update=...)``) and swapping it into its table.
    """

    model_config = ConfigDict(frozen=True)

    id: str


R = TypeVar("R", bound=Record)


class Table(Generic[R]):
    """Ordered in-memory collection of records of one entity type."""

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        self._rows: list[R] = []

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._rows))

    def all(self) -> list[R]:
        return list(self._rows)

    def find(self, record_id: str) -> R | None:
        for row in self._rows:
            if row.id == record_id:
                return row
        return None

    def get(self, record_id: str) -> R:
        row = self.find(record_id)
        if row is None:
            raise NotFoundError(self.entity_name, record_id)
        return row

    def filter(self, predicate: Callable[[R], bool]) -> list[R]:
        return [row for row in self._rows if predicate(row)]

    def add(self, record: R) -> R:
        self._rows = [*self._rows, record]
        return record

    def replace(self, record: R) -> R:
        """Swap the stored row having ``record.id`` for ``record``."""
        self.get(record.id)
        self._rows = [record if row.id == record.id else row for row in self._rows]
        return record

    def clear(self) -> None:
        self._rows = []
