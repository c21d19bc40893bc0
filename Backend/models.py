"""
GymTrack Data Models
Pydantic models for workout documents, analytics results and API payloads.
"""
import uuid
from datetime import date, datetime
from typing import Optional, Any
from pydantic import BaseModel, Field
from enum import Enum


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


# ============================================================
# Enums
# ============================================================

class User(str, Enum):
    NAV = "Nav"
    DELCHAN = "Delchan"


class WorkoutType(str, Enum):
    ARMS = "arms"
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"


class ExerciseCategory(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"
    ACCESSORY = "accessory"


class BodyCategory(str, Enum):
    """Coarse body regions used by the heat map."""
    CHEST = "chest"
    BACK = "back"
    ARMS = "arms"
    SHOULDERS = "shoulders"
    LEGS = "legs"
    CORE = "core"


class ConversationStage(str, Enum):
    INITIAL = "initial"
    GATHERING = "gathering"
    CONFIRMING = "confirming"
    COMPLETE = "complete"


# ============================================================
# Embedded Documents
# ============================================================

class ExerciseSet(BaseModel):
    """One set within an exercise."""
    reps: int = Field(..., gt=0)
    weight: float = Field(0, ge=0, allow_inf_nan=False, description="0 means bodyweight")
    rpe: Optional[float] = Field(None, ge=1, le=10, description="Rate of perceived exertion")
    notes: Optional[str] = None
    rest_time: Optional[int] = Field(None, ge=0, alias="restTime", description="Rest in seconds")

    class Config:
        populate_by_name = True


class Exercise(BaseModel):
    """One movement performed within a session."""
    name: str = Field(..., min_length=1)
    # Fine-grained identifiers (see muscle_map.MuscleGroup). Imports and AI
    # responses may carry tags outside that set, so they stay plain strings.
    muscle_groups: list[str] = Field(default_factory=list, alias="muscleGroups")
    sets: list[ExerciseSet] = Field(default_factory=list)
    equipment: Optional[str] = None
    category: Optional[ExerciseCategory] = None
    notes: Optional[str] = None

    class Config:
        populate_by_name = True


# ============================================================
# Main Documents
# ============================================================

class WorkoutSession(BaseModel):
    """One logged training session."""
    id: str = Field(default_factory=generate_id)
    user: User
    date: date
    workout_type: WorkoutType = Field(..., alias="workoutType")
    exercises: list[Exercise] = Field(default_factory=list)
    duration: int = Field(0, ge=0, description="Minutes")
    notes: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=10)
    body_weight: Optional[float] = Field(None, gt=0, alias="bodyWeight")

    class Config:
        populate_by_name = True


# ============================================================
# Analytics Results
# ============================================================

class MuscleGroupRecord(BaseModel):
    """Per muscle-group aggregate from keyword matching on exercise names."""
    id: str
    name: str
    workout_count: int = Field(0, alias="workoutCount")
    total_volume: float = Field(0, alias="totalVolume")
    exercises: list[str] = Field(default_factory=list)
    last_worked: Optional[date] = Field(None, alias="lastWorked")

    class Config:
        populate_by_name = True


class CategoryTrend(BaseModel):
    """Current intensity of a body category and its change from the prior window."""
    category: BodyCategory
    set_count: int = Field(0, alias="setCount")
    intensity: float = 0.0
    previous_intensity: float = Field(0.0, alias="previousIntensity")
    trend: float = 0.0
    trend_percent: float = Field(0.0, alias="trendPercent")

    class Config:
        populate_by_name = True


class ActivityReport(BaseModel):
    """Heat-map data for one lookback window."""
    window: str
    days: int
    current_cutoff: date = Field(..., alias="currentCutoff")
    previous_cutoff: date = Field(..., alias="previousCutoff")
    current_counts: dict[BodyCategory, int] = Field(default_factory=dict, alias="currentCounts")
    previous_counts: dict[BodyCategory, int] = Field(default_factory=dict, alias="previousCounts")
    current_intensity: dict[BodyCategory, float] = Field(default_factory=dict, alias="currentIntensity")
    previous_intensity: dict[BodyCategory, float] = Field(default_factory=dict, alias="previousIntensity")
    categories: list[CategoryTrend] = Field(default_factory=list)
    most_worked: list[CategoryTrend] = Field(default_factory=list, alias="mostWorked")
    least_worked: list[CategoryTrend] = Field(default_factory=list, alias="leastWorked")

    class Config:
        populate_by_name = True


class WorkoutStats(BaseModel):
    """Dashboard summary numbers for one user."""
    total_workouts: int = Field(0, alias="totalWorkouts")
    total_duration_min: int = Field(0, alias="totalDurationMin")
    total_hours: float = Field(0.0, alias="totalHours")
    total_volume: float = Field(0.0, alias="totalVolume")
    avg_duration: float = Field(0.0, alias="avgDuration")
    avg_rating: Optional[float] = Field(None, alias="avgRating")
    this_week_workouts: int = Field(0, alias="thisWeekWorkouts")
    last_30_days_workouts: int = Field(0, alias="last30DaysWorkouts")
    this_month_workouts: int = Field(0, alias="thisMonthWorkouts")
    current_streak: int = Field(0, alias="currentStreak")
    longest_streak: int = Field(0, alias="longestStreak")
    favorite_workout_type: Optional[WorkoutType] = Field(None, alias="favoriteWorkoutType")

    class Config:
        populate_by_name = True


class ProgressionPoint(BaseModel):
    date: date
    max_weight: float = Field(0.0, alias="maxWeight")
    max_reps: int = Field(0, alias="maxReps")
    volume: float = 0.0
    one_rep_max: float = Field(0.0, alias="oneRepMax")

    class Config:
        populate_by_name = True


class ExerciseProgression(BaseModel):
    """Dated history of a single exercise for strength charts."""
    exercise: str
    data: list[ProgressionPoint] = Field(default_factory=list)
    weight_growth: float = Field(0.0, alias="weightGrowth")
    one_rep_max_growth: float = Field(0.0, alias="oneRepMaxGrowth")
    volume_growth: float = Field(0.0, alias="volumeGrowth")

    class Config:
        populate_by_name = True


class VolumePoint(BaseModel):
    date: date
    total_volume: float = Field(0.0, alias="totalVolume")
    workout_type_volumes: dict[WorkoutType, float] = Field(default_factory=dict, alias="workoutTypeVolumes")
    exercise_count: int = Field(0, alias="exerciseCount")
    set_count: int = Field(0, alias="setCount")

    class Config:
        populate_by_name = True


class VolumeTrends(BaseModel):
    days: int
    points: list[VolumePoint] = Field(default_factory=list)
    total_volume: float = Field(0.0, alias="totalVolume")
    average_volume: float = Field(0.0, alias="averageVolume")
    max_volume: float = Field(0.0, alias="maxVolume")
    training_days: int = Field(0, alias="trainingDays")
    trend: float = 0.0
    workout_type_breakdown: dict[WorkoutType, float] = Field(default_factory=dict, alias="workoutTypeBreakdown")

    class Config:
        populate_by_name = True


class PersonalRecord(BaseModel):
    exercise_name: str = Field(..., alias="exerciseName")
    weight: float
    reps: int
    date: date
    user: User

    class Config:
        populate_by_name = True


# ============================================================
# API Request/Response Models
# ============================================================

class DataUploadResponse(BaseModel):
    """Result of importing a batch of sessions."""
    success: bool
    message: str
    workouts_imported: int = Field(0, alias="workoutsImported")
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class GenerateWorkoutRequest(BaseModel):
    description: str = Field(..., min_length=1)
    user: User


class GenerateWorkoutResponse(BaseModel):
    success: bool
    workout: Optional[dict[str, Any]] = None
    error: Optional[str] = None


class AnalyzeWorkoutRequest(BaseModel):
    """One turn of the conversational workout logger."""
    user_input: str = Field(..., alias="userInput")
    current_workout_data: dict[str, Any] = Field(default_factory=dict, alias="currentWorkoutData")
    conversation_stage: ConversationStage = Field(ConversationStage.INITIAL, alias="conversationStage")
    user: User

    class Config:
        populate_by_name = True


class AnalyzeWorkoutResponse(BaseModel):
    response: str
    workout_data: Optional[dict[str, Any]] = Field(None, alias="workoutData")
    stage: ConversationStage
    final_workout: Optional[dict[str, Any]] = Field(None, alias="finalWorkout")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        use_enum_values = True
