from pydantic import BaseModel, Field
from typing import List, Literal


class WeatherData(BaseModel):
    temperature: int
    feels_like: int
    humidity: int
    wind_speed: int
    uv_index: float = 0
    air_quality_index: int = 0
    pollen_count: int = 0
    weather_condition: str
    fetched_at: str
    provider: str
    is_mock: bool = False
    city: str


class WeatherAlert(BaseModel):
    type: Literal["UV", "AQI"]
    severity: Literal["moderate", "high"]
    message: str
    recommendation: str


class WeatherReport(BaseModel):
    weather: WeatherData
    alerts: List[WeatherAlert] = Field(default_factory=list)
