"""
Routine template service.

Saves the recurring daily pattern (template blocks) of a phase.
"""

from __future__ import annotations

from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.category_repository import ICategoryRepository
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.models.routine_block import RoutineBlock, RoutineBlockDraft, RoutineBlockInput
from app.services.category_resolver import DEFAULT_CATEGORY_NAME, CategoryResolver
from app.utils.block_overlap import validate_day_blocks

logger = setup_logger(__name__)


class RoutineTemplateService:
    """Service for reading and replacing template blocks."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        category_repo: ICategoryRepository,
        default_color: str = "primary",
        default_category_name: str = DEFAULT_CATEGORY_NAME,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.category_repo = category_repo
        self.default_color = default_color
        self.default_category_name = default_category_name

    async def list_templates(self, user_id: str, phase_id: UUID) -> list[RoutineBlock]:
        phase = await self.phase_repo.get_by_id(user_id, phase_id)
        if not phase:
            raise NotFoundError(f"Phase {phase_id} not found")
        return await self.block_repo.list_templates(phase.id)

    async def replace_templates(
        self, user_id: str, phase_id: UUID, blocks: list[RoutineBlockInput]
    ) -> list[RoutineBlock]:
        """
        Replace the template of a phase.

        Raises:
            ValidationError: Empty block list, invalid range or overlapping blocks
            NotFoundError: Phase does not exist for the user
        """
        if not blocks:
            raise ValidationError("At least one block is required")
        validate_day_blocks(blocks)

        phase = await self.phase_repo.get_by_id(user_id, phase_id)
        if not phase:
            raise NotFoundError(f"Phase {phase_id} not found")

        resolver = CategoryResolver(self.category_repo, user_id, self.default_category_name)
        drafts = [
            RoutineBlockDraft(
                category_id=await resolver.resolve(block.category),
                title=block.title.strip(),
                note=(block.note or "").strip() or None,
                start_time=block.start_time,
                end_time=block.end_time,
                color=block.color or self.default_color,
                is_template=True,
                date=None,
            )
            for block in sorted(blocks, key=lambda b: b.start_time)
        ]
        created = await self.block_repo.replace_templates(phase.id, drafts)
        logger.info("Saved %d template block(s) for phase %s", len(created), phase.id)
        return created
