from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class SessionStats(BaseModel):
    total: int = 0
    hadir: int = 0
    izin: int = 0
    sakit: int = 0
    alpha: int = 0
    belum_absen: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SystemStats(BaseModel):
    total_students: int
    present_today: int
    total_courses: int
    attendance_rate: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SystemStatsData(BaseModel):
    total_students: int
    present_today: int
    total_courses: int
    attendance_rate: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SystemStatsResponse(BaseModel):
    success: bool = True
    data: SystemStatsData
