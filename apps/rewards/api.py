"""
Rewards API endpoints.

CRUD for rewards plus the purchase mutation that spends points.
"""
from typing import List
from uuid import UUID
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.core.dtos import ActionResultDTO
from .dtos import RewardDTO, RewardIn, RewardUpdate
from .services import list_rewards, create_reward, update_reward, delete_reward, buy_reward

router = Router(tags=["Rewards"])


@router.get("", response=List[RewardDTO])
async def get_rewards(request: HttpRequest):
    return await list_rewards()


@router.post("", response=RewardDTO)
async def add_reward(request: HttpRequest, payload: RewardIn):
    return await create_reward(payload)


@router.patch("/{reward_id}", response=RewardDTO)
async def edit_reward(request: HttpRequest, reward_id: UUID, payload: RewardUpdate):
    reward = await update_reward(reward_id, payload)
    if reward is None:
        raise HttpError(404, "Reward not found")
    return reward


@router.delete("/{reward_id}")
async def remove_reward(request: HttpRequest, reward_id: UUID):
    if not await delete_reward(reward_id):
        raise HttpError(404, "Reward not found")
    return {"deleted": True}


@router.post("/{reward_id}/buy", response=ActionResultDTO)
async def buy_reward_api(request: HttpRequest, reward_id: UUID):
    """
    Spend points on a reward.

    Returns success=false with message 'insufficient balance' when the
    caller cannot afford it; the balance is left unchanged.
    """
    return await buy_reward(reward_id, request.auth)
