"""
Services for Rewards app.

buy_reward() debits the caller with one conditional UPDATE, so concurrent
purchases by the same user can never overdraw the balance.
"""
import logging
from typing import List, Optional
from uuid import UUID

from asgiref.sync import sync_to_async
from django.utils import timezone

from apps.core.decorators import translate_store_errors
from apps.core.dtos import ActionResultDTO
from apps.core.exceptions import InvariantViolation, ResultCode
from apps.identity.dtos import Principal
from apps.identity.models import User
from apps.ledger.models import PointsTransactionType
from apps.ledger.services import debit_points
from .models import Reward
from .dtos import RewardDTO, RewardIn, RewardUpdate

logger = logging.getLogger(__name__)


def _to_dto(reward: Reward) -> RewardDTO:
    return RewardDTO(id=reward.id, title=reward.title, points=reward.points)


# =============================================================================
# CRUD
# =============================================================================

async def get_reward_dto(reward_id: UUID) -> Optional[RewardDTO]:
    reward = await Reward.objects.filter(id=reward_id).afirst()
    return _to_dto(reward) if reward else None


async def list_rewards() -> List[RewardDTO]:
    return [_to_dto(reward) async for reward in Reward.objects.all()]


async def create_reward(payload: RewardIn) -> RewardDTO:
    reward = await Reward.objects.acreate(**payload.model_dump())
    return _to_dto(reward)


async def update_reward(reward_id: UUID, payload: RewardUpdate) -> Optional[RewardDTO]:
    changes = {key: value for key, value in payload.model_dump().items() if value is not None}
    changes['updated_at'] = timezone.now()

    updated = await Reward.objects.filter(id=reward_id).aupdate(**changes)
    if not updated:
        return None
    return await get_reward_dto(reward_id)


async def delete_reward(reward_id: UUID) -> bool:
    deleted, _ = await Reward.objects.filter(id=reward_id).adelete()
    return deleted > 0


# =============================================================================
# Purchase
# =============================================================================

@translate_store_errors
async def buy_reward(reward_id: UUID, principal: Principal) -> ActionResultDTO:
    """
    Debit the reward's cost from the caller's balance.

    An unknown reward or an insufficient balance is a negative result with
    the balance left unchanged.

    Raises:
        InvariantViolation: the principal has no backing user record.
    """
    reward = await Reward.objects.filter(id=reward_id).afirst()
    if reward is None:
        return ActionResultDTO(success=False, message="Reward not found", code=ResultCode.NOT_FOUND)

    if not await User.objects.filter(id=principal.user_id).aexists():
        raise InvariantViolation(f"Principal {principal.user_id} has no user record")

    entry = await sync_to_async(debit_points)(
        principal.user_id,
        reward.points,
        reference_id=reward.id,
        description=f"Bought reward: {reward.title}"[:255],
        transaction_type=PointsTransactionType.REWARD_PURCHASE,
    )
    if entry is None:
        logger.info(f"User {principal.user_id} cannot afford reward {reward.id} ({reward.points} pts)")
        return ActionResultDTO(
            success=False,
            message="insufficient balance",
            code=ResultCode.INSUFFICIENT_BALANCE,
        )

    logger.info(f"User {principal.user_id} bought reward {reward.id} (-{reward.points}, balance {entry.balance_after})")
    return ActionResultDTO(
        success=True,
        message=f"Reward purchased for {reward.points} points",
        balance=entry.balance_after,
    )
