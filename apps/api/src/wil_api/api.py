from fastapi import APIRouter

from wil_api.modules.accounts import router as accounts_router
from wil_api.modules.applications import router as applications_router
from wil_api.modules.codes import router as codes_router
from wil_api.modules.dashboard import router as dashboard_router
from wil_api.modules.declarations import router as declarations_router
from wil_api.modules.events import router as events_router
from wil_api.modules.students import router as students_router

api_router = APIRouter()

api_router.include_router(applications_router)
api_router.include_router(codes_router)
api_router.include_router(accounts_router)
api_router.include_router(students_router)
api_router.include_router(events_router)
api_router.include_router(declarations_router)
api_router.include_router(dashboard_router)
