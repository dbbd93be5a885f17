from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.session import get_db_session
from work_scheduler.repositories import rules as rule_repo
from work_scheduler.schemas.rules import ValidationRuleCreate, ValidationRuleRead, ValidationRuleUpdate
from work_scheduler.services.rules import RuleConfigError, RuleType, parse_rule_config

router = APIRouter()


@router.get("/", response_model=list[ValidationRuleRead])
async def list_rules(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[ValidationRuleRead]:
    rules = await rule_repo.list_rules(session)
    return [ValidationRuleRead.model_validate(rule) for rule in rules]


@router.get("/types")
async def list_rule_types() -> list[str]:
    """Rule types the evaluator understands."""
    return [kind.value for kind in RuleType]


@router.post("/", response_model=ValidationRuleRead, status_code=status.HTTP_201_CREATED)
async def create_rule(
    payload: ValidationRuleCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> ValidationRuleRead:
    rule = await rule_repo.create_rule(session, payload)
    await session.commit()
    return ValidationRuleRead.model_validate(rule)


@router.put("/{rule_id}", response_model=ValidationRuleRead)
async def update_rule(
    rule_id: int,
    payload: ValidationRuleUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ValidationRuleRead:
    rule = await rule_repo.get_rule(session, rule_id)
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rule not found")
    try:
        parse_rule_config(
            payload.rule_type or rule.rule_type,
            payload.config if payload.config is not None else rule.config,
        )
    except RuleConfigError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    rule = await rule_repo.update_rule(session, rule, payload)
    await session.commit()
    return ValidationRuleRead.model_validate(rule)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(rule_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]) -> None:
    rule = await rule_repo.get_rule(session, rule_id)
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rule not found")
    await rule_repo.delete_rule(session, rule)
    await session.commit()
