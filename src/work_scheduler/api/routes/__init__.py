from fastapi import APIRouter

from . import employees, preferences, rules, schedule, shifts

api_router = APIRouter()

api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(employees.roles_router, prefix="/roles", tags=["roles"])
api_router.include_router(shifts.router, prefix="/shifts", tags=["shifts"])
api_router.include_router(rules.router, prefix="/validation-rules", tags=["validation_rules"])
api_router.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
api_router.include_router(schedule.router, tags=["schedule"])
