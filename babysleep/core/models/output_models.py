# babysleep/core/models/output_models.py

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from babysleep.core.models.data_models import SleepSession


class WakeWindow(BaseModel):
    """Awake interval between two chronologically adjacent completed sessions"""
    start: datetime
    end: datetime
    duration_minutes: float


class PeriodSummary(BaseModel):
    total_minutes: float = Field(..., ge=0.0)
    avg_minutes: float = Field(..., ge=0.0)
    count: int = Field(..., ge=0)


class NightDaySplit(BaseModel):
    night: int = Field(0, ge=0)
    day: int = Field(0, ge=0)


class SleepMetrics(BaseModel):
    """Numeric summary of a period, also the input to the recommendation prompt"""
    avg_duration_minutes: float = 0.0
    total_sessions: int = 0
    avg_wake_window_minutes: float = 0.0
    night_count: int = 0
    day_count: int = 0


class NextEventBand(str, Enum):
    READY_TO_TRACK = "ready_to_track"
    SLEEPING = "sleeping"
    DUE_NOW = "due_now"
    DUE_SOON = "due_soon"
    NOT_YET = "not_yet"


class WakeWindowSource(str, Enum):
    HISTORY = "history"
    AGE_RECOMMENDATION = "age_recommendation"


class PredictedEvent(BaseModel):
    band: NextEventBand
    # Asleep
    minutes_elapsed: Optional[int] = None
    predicted_wake_time: Optional[datetime] = None
    minutes_until_wake: Optional[int] = None
    average_sleep_minutes: Optional[float] = None
    # Awake
    minutes_awake: Optional[int] = None
    minutes_until_next_nap: Optional[float] = None
    wake_window_minutes: Optional[float] = None
    wake_window_source: Optional[WakeWindowSource] = None


class DailyTotal(BaseModel):
    date: date
    total_hours: float
    session_count: int


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class DailyTrend(BaseModel):
    today_hours: float
    yesterday_hours: float
    change_hours: float
    change_percent: int
    direction: TrendDirection


class GoalProgress(BaseModel):
    slept_hours: float
    recommended_hours: float
    percent: int = Field(..., ge=0, le=100)


class InsightBand(str, Enum):
    NO_DATA = "no_data"
    CONSISTENT = "consistent"
    ABOVE_AVERAGE = "above_average"
    BELOW_AVERAGE = "below_average"
    WELL_TRACKED = "well_tracked"
    ON_TRACK = "on_track"


class DailyInsight(BaseModel):
    band: InsightBand
    today_minutes: float = 0.0
    daily_average_minutes: float = 0.0
    difference_minutes: float = 0.0
    sessions_today: int = 0


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(BaseModel):
    title: str
    description: str
    confidence: Confidence


class ParseStatus(str, Enum):
    PARSED = "parsed"
    FALLBACK = "fallback"


class ParsedRecommendations(BaseModel):
    """Tagged result of reading the model reply: parsed JSON or the whole-text fallback"""
    status: ParseStatus
    recommendations: List[Recommendation]


class InsightsStatus(str, Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"
    AI_NOT_CONFIGURED = "ai_not_configured"
    AI_UNAVAILABLE = "ai_unavailable"


class InsightsReport(BaseModel):
    status: InsightsStatus
    message: Optional[str] = None
    age_in_months: Optional[int] = None
    patterns: Optional[SleepMetrics] = None
    recommendations: Optional[List[Recommendation]] = None
    ai_enabled: bool = False
    parse_status: Optional[ParseStatus] = None


class DashboardSummary(BaseModel):
    """Everything the home screen shows for one child at one instant"""
    child_id: str
    generated_at: datetime
    age_in_months: int
    today_total_hours: float
    sessions_today: int
    active_session: Optional[SleepSession] = None
    elapsed_minutes: Optional[int] = None
    next_event: PredictedEvent
    goal_progress: GoalProgress
    daily_trend: DailyTrend
    daily_insight: DailyInsight


class HistorySummary(BaseModel):
    child_id: str
    generated_at: datetime
    days: int
    daily_totals: List[DailyTotal] = []
    wake_windows: List[WakeWindow] = []
    average_wake_window_minutes: float = 0.0
