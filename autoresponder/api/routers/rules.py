"""Rules router: CRUD, enable/disable toggle and a dry-run match endpoint."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from autoresponder.api.dependencies import get_session
from autoresponder.api.schemas.rules import (
    MatchRequest,
    MatchResponse,
    RuleCreateRequest,
    RulePatchRequest,
    RuleResponse,
)
from autoresponder.core.exceptions import ProjectError
from autoresponder.responder.rules.matcher import match
from autoresponder.services.rule_service import RuleService

router = APIRouter(prefix="/rules", tags=["rules"])


def _to_schema(rule) -> RuleResponse:
    return RuleResponse(
        id=rule.id,
        question=rule.question,
        answer=rule.answer,
        keywords=rule.keywords or [],
        is_active=rule.is_active,
        usage_count=rule.usage_count or 0,
        created_by=rule.created_by,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


def _http_error(exc: ProjectError) -> HTTPException:
    return HTTPException(status_code=exc.http_status, detail=exc.message)


@router.get("", response_model=List[RuleResponse])
async def list_rules(
    active_only: bool = False,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    rules = await svc.list_all(active_only=active_only)
    return [_to_schema(r) for r in rules]


@router.post("", response_model=RuleResponse, status_code=status.HTTP_201_CREATED)
async def create_rule(
    body: RuleCreateRequest,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    try:
        rule = await svc.create(
            question=body.question,
            answer=body.answer,
            keywords=body.keywords,
            is_active=body.is_active,
            created_by=body.created_by,
        )
    except ProjectError as exc:
        raise _http_error(exc) from exc
    return _to_schema(rule)


@router.post("/match", response_model=Optional[MatchResponse])
async def match_message(
    body: MatchRequest,
    session: AsyncSession = Depends(get_session),
):
    """Which active rule would answer *message*, without posting or counting anything."""
    svc = RuleService(session)
    rules = await svc.list_all(active_only=True)
    result = match(body.message, rules)
    if result is None:
        return None
    return MatchResponse(rule=_to_schema(result.rule), reason=result.reason)


@router.get("/{rule_id}", response_model=RuleResponse)
async def get_rule(
    rule_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    try:
        rule = await svc.get(rule_id)
    except ProjectError as exc:
        raise _http_error(exc) from exc
    return _to_schema(rule)


@router.patch("/{rule_id}", response_model=RuleResponse)
async def patch_rule(
    rule_id: UUID,
    body: RulePatchRequest,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    update_data = body.model_dump(exclude_none=True)
    if not update_data:
        raise HTTPException(status_code=422, detail="No fields to update")
    try:
        rule = await svc.update(rule_id, update_data)
    except ProjectError as exc:
        raise _http_error(exc) from exc
    return _to_schema(rule)


@router.post("/{rule_id}/toggle", response_model=RuleResponse)
async def toggle_rule(
    rule_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    try:
        rule = await svc.toggle_active(rule_id)
    except ProjectError as exc:
        raise _http_error(exc) from exc
    return _to_schema(rule)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(
    rule_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    svc = RuleService(session)
    try:
        await svc.delete(rule_id)
    except ProjectError as exc:
        raise _http_error(exc) from exc
