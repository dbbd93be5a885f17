from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.models.rules import ValidationRule
from work_scheduler.schemas.rules import ValidationRuleCreate, ValidationRuleUpdate


async def list_rules(session: AsyncSession, *, enabled_only: bool = False) -> list[ValidationRule]:
    query = select(ValidationRule).order_by(ValidationRule.priority.asc(), ValidationRule.id.asc())
    if enabled_only:
        query = query.where(ValidationRule.enabled.is_(True))
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_rule(session: AsyncSession, payload: ValidationRuleCreate) -> ValidationRule:
    rule = ValidationRule(**payload.model_dump())
    session.add(rule)
    await session.flush()
    await session.refresh(rule)
    return rule


async def get_rule(session: AsyncSession, rule_id: int) -> ValidationRule | None:
    return await session.get(ValidationRule, rule_id)


async def update_rule(
    session: AsyncSession, rule: ValidationRule, payload: ValidationRuleUpdate
) -> ValidationRule:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(rule, field, value)
    await session.flush()
    await session.refresh(rule)
    return rule


async def delete_rule(session: AsyncSession, rule: ValidationRule) -> None:
    await session.delete(rule)
