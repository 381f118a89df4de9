"""Endpoints exposing the deep-link codec to the dashboard shell."""

from __future__ import annotations

from fastapi import APIRouter, Query

from notification_center.application.use_cases.navigation import (
    decode_action_url,
    encode_target,
)
from notification_center.interfaces.api.schemas import (
    ActionUrlRead,
    NavigationTargetPayload,
    NavigationTargetRead,
)

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("/decode", response_model=NavigationTargetRead)
def decode_navigation_target(
    url: str = Query(..., description="Action URL taken from a notification"),
) -> NavigationTargetRead:
    """Decode ``url``; malformed links come back as a non-navigable target."""

    return NavigationTargetRead.from_entity(decode_action_url(url))


@router.post("/encode", response_model=ActionUrlRead)
def encode_navigation_target(payload: NavigationTargetPayload) -> ActionUrlRead:
    return ActionUrlRead(action_url=encode_target(payload.to_entity()))


__all__ = ["router"]
