# apps/board/ordering.py

"""
Lane and task ordering engine

Positions are integer keys: dense when appended, tolerant of gaps and
duplicates after deletes or explicit assignments. Readers order by
(position, created_at, id), so ties are stable.

WIP limits are checked only when a task enters a lane from another lane;
lowering a limit never evicts tasks already inside.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from apps.core.exceptions import BadRequestError, NotFoundError, WipLimitExceeded
from apps.core.models import Board, Lane, Subtask, Task

logger = logging.getLogger(__name__)


def compute_append_position(existing_positions: Iterable[int]) -> int:
    """max + 1, or 0 for an empty container"""
    positions = [p for p in existing_positions if p is not None]
    if not positions:
        return 0
    return max(positions) + 1


def _next_position(queryset) -> int:
    current = queryset.aggregate(top=Max('position'))['top']
    return compute_append_position([current] if current is not None else [])


class OrderingEngine:
    """
    Position assignment, WIP enforcement and bulk re-sequencing

    `default_lanes` is a sequence of (name, wip_limit) pairs used when a
    board is bootstrapped.
    """

    def __init__(self, default_lanes: Sequence[Tuple[str, Optional[int]]]):
        self._default_lanes = [(name, limit) for name, limit in default_lanes]

    @property
    def default_lanes(self) -> List[Tuple[str, Optional[int]]]:
        return list(self._default_lanes)

    # === APPEND POSITIONS ===

    # Append positions are read without a lock: two concurrent creates may
    # land on the same position, which the tie-breaking order tolerates.

    def append_lane_position(self, board: Board) -> int:
        return _next_position(Lane.objects.filter(board=board))

    def append_task_position(self, lane: Lane) -> int:
        return _next_position(Task.objects.filter(lane=lane))

    def append_subtask_position(self, task: Task) -> int:
        return _next_position(Subtask.objects.filter(task=task))

    # === BOOTSTRAP ===

    def bootstrap_default_lanes(self, board: Board) -> List[Lane]:
        """Creates the configured lanes at positions 0..n-1"""
        with transaction.atomic():
            lanes = [
                Lane.objects.create(board=board, name=name, position=index, wip_limit=limit)
                for index, (name, limit) in enumerate(self._default_lanes)
            ]
        logger.debug("Bootstrapped %d lanes on board %s", len(lanes), board.id)
        return lanes

    # === MOVE ===

    def move_task(self, task: Task, target_lane_id, target_position: int) -> Task:
        """
        Moves `task` to `target_lane_id` at `target_position`

        Target lane and task rows are locked for the duration of the check,
        so concurrent moves into one lane cannot both pass the WIP ceiling.
        """
        with transaction.atomic():
            lane = (
                Lane.objects
                .select_for_update()
                .filter(id=target_lane_id, board_id=task.board_id)
                .first()
            )
            if lane is None:
                raise NotFoundError('Lane not found in this board')

            locked = Task.objects.select_for_update().get(pk=task.pk)

            if locked.lane_id != lane.id and lane.wip_limit is not None:
                current = Task.objects.filter(lane=lane).count()
                if current >= lane.wip_limit:
                    logger.info(
                        "WIP limit %s reached on lane %s, refused task %s",
                        lane.wip_limit, lane.id, task.id,
                    )
                    raise WipLimitExceeded(lane.wip_limit)

            task.lane = lane
            task.position = target_position
            task.save(update_fields=['lane', 'position', 'updated_at'])

        return task

    # === REORDER ===

    def reorder_lanes(self, board: Board, assignments: Sequence[Tuple[object, int]]) -> int:
        """
        Applies every (lane_id, position) pair or none of them

        Returns the number of lanes updated.
        """
        if not assignments:
            return 0

        lane_ids = {str(lane_id) for lane_id, _ in assignments}
        owned = {
            str(pk) for pk in
            Lane.objects.filter(board=board, id__in=lane_ids).values_list('id', flat=True)
        }
        if owned != lane_ids:
            raise NotFoundError('Lane not found in this board')

        now = timezone.now()
        with transaction.atomic():
            for lane_id, position in assignments:
                updated = Lane.objects.filter(id=lane_id, board=board).update(
                    position=position, updated_at=now,
                )
                if updated != 1:
                    raise NotFoundError('Lane not found in this board')

        logger.info("Reordered %d lanes on board %s", len(assignments), board.id)
        return len(assignments)

    # === DELETE GUARD ===

    def delete_lane(self, lane: Lane) -> None:
        if lane.tasks.exists():
            raise BadRequestError('Cannot delete lane with tasks. Move or delete tasks first.')
        lane.delete()
