import logging
from collections.abc import Sequence

from school_office.core.audit import AuditAction, AuditService
from school_office.core.config import settings
from school_office.core.exceptions import InactiveRecordError, NotFoundError, ValidationError
from school_office.core.store import InMemoryStore
from school_office.modules.fee_structures.models import FeeItem, FeeStructure
from school_office.modules.fee_structures.schemas import (
    FeeItemCreate,
    FeeStructureCreate,
    FeeStructureFilters,
    FeeStructureUpdate,
)
from school_office.shared.utils.money import to_money

logger = logging.getLogger(__name__)


class FeeStructureService:
    """Service for fee structure templates."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.audit = AuditService(store)

    def _build_fees(self, fees: Sequence[FeeItemCreate]) -> list[FeeItem]:
        if not fees:
            raise ValidationError("At least one fee item is required", field="fees")
        amounts = []
        for index, fee in enumerate(fees):
            try:
                amount = to_money(fee.amount)
            except ValueError as exc:
                raise ValidationError(str(exc), field=f"fees.{index}.amount") from exc
            if amount < 0:
                raise ValidationError("Amount cannot be negative", field=f"fees.{index}.amount")
            if not fee.description.strip():
                raise ValidationError("Description is required", field=f"fees.{index}.description")
            amounts.append(amount)
        return [
            FeeItem(
                id=self.store.ids.generate("FEI"),
                category=fee.category.value,
                description=fee.description.strip(),
                amount=amount,
                is_optional=fee.is_optional,
            )
            for fee, amount in zip(fees, amounts)
        ]

    def get_structure_by_id(self, structure_id: str) -> FeeStructure:
        structure = self.store.fee_structures.find(structure_id)
        if not structure:
            raise NotFoundError("Fee structure", structure_id)
        return structure

    def get_active_structure(self, structure_id: str) -> FeeStructure:
        """Resolve a structure reference for billing; historical ones are rejected."""
        structure = self.store.fee_structures.find(structure_id)
        if not structure:
            raise ValidationError(
                f"Fee structure with id {structure_id} not found", field="fee_structure_id"
            )
        if not structure.is_active:
            raise ValidationError(
                "Fee structure is not active", field="fee_structure_id"
            )
        return structure

    def list_structures(self, filters: FeeStructureFilters) -> list[FeeStructure]:
        """
        List fee structures.

        Inactive structures are only included when ``show_historical`` is set.
        """
        search = filters.search.lower() if filters.search else None

        def matches(structure: FeeStructure) -> bool:
            if not filters.show_historical and not structure.is_active:
                return False
            if filters.academic_year and structure.academic_year != filters.academic_year:
                return False
            if search:
                return (
                    search in structure.class_name.lower()
                    or search in structure.academic_year.lower()
                    or search in structure.term.lower()
                )
            return True

        return self.store.fee_structures.filter(matches)

    def list_academic_years(self) -> list[str]:
        """Distinct academic years across all structures, in first-seen order."""
        years: list[str] = []
        for structure in self.store.fee_structures:
            if structure.academic_year not in years:
                years.append(structure.academic_year)
        return years

    def create_structure(self, data: FeeStructureCreate) -> FeeStructure:
        fees = self._build_fees(data.fees)
        structure = FeeStructure(
            id=self.store.ids.generate("FEE"),
            academic_year=data.academic_year,
            class_name=data.class_name,
            term=data.term,
            fees=fees,
        )
        self.store.fee_structures.add(structure)

        self.audit.log(
            action=AuditAction.CREATE,
            entity_type="FeeStructure",
            entity_id=structure.id,
            entity_identifier=f"{structure.class_name} {structure.term} {structure.academic_year}",
            new_values={"fees": len(fees), "total_amount": str(structure.total_amount)},
        )
        return structure

    def update_structure(self, structure_id: str, data: FeeStructureUpdate) -> FeeStructure:
        """Update a structure; new fees replace the old ones with fresh ids."""
        structure = self.get_structure_by_id(structure_id)
        if not structure.is_active:
            raise InactiveRecordError(
                "Fee structure", structure.id, "is historical and cannot be edited"
            )

        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"fees"})
        if data.fees is not None:
            changes["fees"] = self._build_fees(data.fees)
        if not changes:
            return structure

        updated = self.store.fee_structures.replace(structure.model_copy(update=changes))
        self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="FeeStructure",
            entity_id=structure.id,
            old_values={"total_amount": str(structure.total_amount)},
            new_values={"total_amount": str(updated.total_amount)},
        )
        return updated

    def deactivate_structure(self, structure_id: str) -> FeeStructure:
        """Deactivate a structure. It stays available as historical."""
        structure = self.get_structure_by_id(structure_id)
        if not structure.is_active:
            raise InactiveRecordError("Fee structure", structure.id, "is already inactive")

        updated = self.store.fee_structures.replace(
            structure.model_copy(update={"is_active": False})
        )
        self.audit.log(
            action=AuditAction.DEACTIVATE,
            entity_type="FeeStructure",
            entity_id=structure.id,
            old_values={"is_active": True},
            new_values={"is_active": False},
        )
        return updated

    def copy_structure(
        self, structure_id: str, academic_year: str | None = None
    ) -> FeeStructureCreate:
        """
        Build a create payload pre-filled from an existing structure.

        Nothing is saved; the caller adjusts the payload and submits it as a
        new structure. Historical structures can be copied too.
        """
        structure = self.get_structure_by_id(structure_id)
        return FeeStructureCreate(
            academic_year=academic_year or settings.default_academic_year,
            class_name=structure.class_name,
            term=structure.term,
            fees=[
                FeeItemCreate(
                    category=fee.category,
                    description=fee.description,
                    amount=fee.amount,
                    is_optional=fee.is_optional,
                )
                for fee in structure.fees
            ],
        )
