from fastapi import APIRouter

from src.attendances.router import router as attendances_router
from src.courses.router import router as courses_router
from src.sessions.router import router as sessions_router
from src.stats.router import router as stats_router
from src.students.router import router as students_router


api_router = APIRouter()

# /api/sessions/...
api_router.include_router(
    sessions_router,
    prefix="/sessions",
    tags=["Sessions"]
)

# /api/attendances/...
api_router.include_router(
    attendances_router,
    prefix="/attendances",
    tags=["Attendances"]
)

# /api/students
api_router.include_router(
    students_router,
    prefix="/students",
    tags=["Reference"]
)

# /api/courses
api_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["Reference"]
)

# /api/stats
api_router.include_router(
    stats_router,
    prefix="/stats",
    tags=["Statistics"]
)
