from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from src.database.mongo.core import get_mongo
from src.stats.schemas import SystemStatsData, SystemStatsResponse
from src.stats.service import system_stats

router = APIRouter()

@router.get(
    "",
    description="Roster size, course count and how many distinct students were marked present today.",
    response_description="System wide attendance statistics",
    status_code=status.HTTP_200_OK,
    response_model=SystemStatsResponse,
)
def get_system_stats(db: Database = Depends(get_mongo)):
    stats = system_stats(db=db)
    return SystemStatsResponse(data=SystemStatsData(
        total_students=stats.total_students,
        present_today=stats.present_today,
        total_courses=stats.total_courses,
        attendance_rate=f"{stats.attendance_rate}%",
    ))
