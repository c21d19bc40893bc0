"""
GymTrack FastAPI Backend
Workout logging, analytics and AI-assisted entry for Nav and Delchan.
"""
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, Optional
from fastapi import FastAPI, HTTPException, Depends, Body
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from config import settings
from models import (
    User, WorkoutType, WorkoutSession,
    GenerateWorkoutRequest, GenerateWorkoutResponse,
    AnalyzeWorkoutRequest, AnalyzeWorkoutResponse,
)
from database import init_database, close_connection, get_repository, WorkoutRepository
from muscle_map import muscle_groups_for_workout_type, get_muscle_group_label, category_of_muscle_group, get_workout_type_label
from muscle_analyzer import analyze_muscle_groups, workouts_for_muscle_group, MUSCLE_KEYWORDS
from activity import ActivityWindow, compare_activity
from stats_service import (
    calculate_workout_stats, strength_progression, volume_trends,
    personal_records, workout_type_distribution,
)
from data_io import import_sessions, export_json, export_csv, export_filename, describe_validation_error
from gemini_service import (
    generate_workout_from_description, analyze_workout_message,
    analysis_error_response, WorkoutGenerationError,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("api")


# ============================================================
# App Lifecycle
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Starting GymTrack API...")
    init_database()
    yield
    logger.info("Shutting down...")
    close_connection()


app = FastAPI(
    title="GymTrack API",
    description="Workout logging and training analytics",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _today(today: Optional[date]) -> date:
    return today or date.today()


def _dump(session: WorkoutSession) -> dict:
    return session.model_dump(mode="json", by_alias=True)


# field name or alias -> key used by model_dump(by_alias=True)
_SESSION_KEYS: dict[str, str] = {
    key: field.alias or name
    for name, field in WorkoutSession.model_fields.items()
    for key in (name, field.alias or name)
}


# ============================================================
# Users
# ============================================================

@app.get("/api/users")
async def api_list_users():
    return {"users": [u.value for u in User]}


# ============================================================
# Workout Sessions
# ============================================================

@app.get("/api/users/{user}/workouts")
async def api_get_user_workouts(
    user: User,
    workout_type: Optional[WorkoutType] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    """Workout history, newest first."""
    sessions = repo.list_sessions(user)
    if workout_type:
        sessions = [s for s in sessions if s.workout_type == workout_type]
    sessions.sort(key=lambda s: s.date, reverse=True)
    return {
        "workouts": [_dump(s) for s in sessions],
        "count": len(sessions)
    }


@app.post("/api/users/{user}/workouts", status_code=201)
async def api_create_workout(
    user: User,
    session: WorkoutSession,
    repo: WorkoutRepository = Depends(get_repository),
):
    if session.user != user:
        raise HTTPException(400, f"Workout belongs to {session.user.value}, not {user.value}")
    workout_id = repo.save(session)
    logger.info(f"Logged workout {workout_id} for {user.value}")
    return {"workout_id": workout_id, "message": "Workout saved"}


@app.get("/api/workouts/{workout_id}")
async def api_get_workout(workout_id: str, repo: WorkoutRepository = Depends(get_repository)):
    session = repo.get_session(workout_id)
    if not session:
        raise HTTPException(404, "Workout not found")
    return _dump(session)


@app.put("/api/workouts/{workout_id}")
async def api_update_workout(
    workout_id: str,
    updates: dict[str, Any] = Body(...),
    repo: WorkoutRepository = Depends(get_repository),
):
    """Merge the given fields into an existing workout. Keys may be field names or aliases."""
    existing = repo.get_session(workout_id)
    if not existing:
        raise HTTPException(404, "Workout not found")

    unknown = sorted(key for key in updates if key not in _SESSION_KEYS)
    if unknown:
        raise HTTPException(422, f"Unknown workout fields: {', '.join(unknown)}")

    merged = existing.model_dump(by_alias=True)
    for key, value in updates.items():
        merged[_SESSION_KEYS[key]] = value
    merged["id"] = workout_id
    try:
        session = WorkoutSession.model_validate(merged)
    except ValidationError as e:
        raise HTTPException(422, describe_validation_error(e))

    repo.save(session)
    return _dump(session)


@app.delete("/api/workouts/{workout_id}")
async def api_delete_workout(workout_id: str, repo: WorkoutRepository = Depends(get_repository)):
    if not repo.delete(workout_id):
        raise HTTPException(404, "Workout not found")
    return {"message": "Workout deleted", "workout_id": workout_id}


@app.delete("/api/users/{user}/workouts")
async def api_clear_workouts(user: User, repo: WorkoutRepository = Depends(get_repository)):
    deleted = repo.clear(user)
    logger.info(f"Cleared {deleted} workouts for {user.value}")
    return {"deleted": deleted}


# ============================================================
# Analytics
# ============================================================

@app.get("/api/users/{user}/muscle-groups")
async def api_muscle_groups(user: User, repo: WorkoutRepository = Depends(get_repository)):
    sessions = repo.list_sessions(user)
    records = analyze_muscle_groups(sessions)
    return {
        "muscle_groups": [r.model_dump(mode="json", by_alias=True) for r in records],
        "total_workouts": len(sessions),
        "total_volume": sum(r.total_volume for r in records),
    }


@app.get("/api/users/{user}/muscle-groups/{muscle_key}/workouts")
async def api_muscle_group_workouts(
    user: User,
    muscle_key: str,
    repo: WorkoutRepository = Depends(get_repository),
):
    if muscle_key not in MUSCLE_KEYWORDS:
        raise HTTPException(404, f"Unknown muscle group: {muscle_key}")
    sessions = workouts_for_muscle_group(repo.list_sessions(user), muscle_key)
    return {
        "muscle_group": muscle_key,
        "workouts": [_dump(s) for s in sessions],
        "count": len(sessions),
    }


@app.get("/api/users/{user}/activity")
async def api_activity(
    user: User,
    window: ActivityWindow = ActivityWindow.MONTH,
    today: Optional[date] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    report = compare_activity(repo.list_sessions(user), window, _today(today))
    return report.model_dump(mode="json", by_alias=True)


@app.get("/api/users/{user}/stats")
async def api_stats(
    user: User,
    today: Optional[date] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    sessions = repo.list_sessions(user)
    stats = calculate_workout_stats(sessions, _today(today))
    return {
        **stats.model_dump(mode="json", by_alias=True),
        "workoutTypeDistribution": {t.value: n for t, n in workout_type_distribution(sessions).items()},
    }


@app.get("/api/users/{user}/progression")
async def api_progression(
    user: User,
    exercise: Optional[str] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    progressions = strength_progression(repo.list_sessions(user), exercise=exercise)
    return {"progressions": [p.model_dump(mode="json", by_alias=True) for p in progressions]}


@app.get("/api/users/{user}/volume-trends")
async def api_volume_trends(
    user: User,
    days: int = 90,
    today: Optional[date] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    if days <= 0:
        raise HTTPException(400, "days must be positive")
    trends = volume_trends(repo.list_sessions(user), _today(today), days=days)
    return trends.model_dump(mode="json", by_alias=True)


@app.get("/api/users/{user}/personal-records")
async def api_personal_records(user: User, repo: WorkoutRepository = Depends(get_repository)):
    records = personal_records(repo.list_sessions(user))
    return {"records": [r.model_dump(mode="json", by_alias=True) for r in records]}


@app.get("/api/workout-types/{workout_type}/muscle-groups")
async def api_workout_type_muscle_groups(workout_type: WorkoutType):
    return {
        "workout_type": workout_type.value,
        "label": get_workout_type_label(workout_type),
        "muscle_groups": [
            {
                "id": m.value,
                "label": get_muscle_group_label(m),
                "category": category_of_muscle_group(m).value,
            }
            for m in muscle_groups_for_workout_type(workout_type)
        ],
    }


# ============================================================
# Import / Export
# ============================================================

@app.post("/api/users/{user}/import")
async def api_import(
    user: User,
    payload: Any = Body(...),
    repo: WorkoutRepository = Depends(get_repository),
):
    sessions, result = import_sessions(payload, user)
    for session in sessions:
        repo.save(session)

    body = result.model_dump(by_alias=True)
    if not result.success:
        return JSONResponse(status_code=400, content=body)
    logger.info(f"Imported {len(sessions)} workouts for {user.value}")
    return body


@app.get("/api/users/{user}/export")
async def api_export(
    user: User,
    format: str = "json",
    today: Optional[date] = None,
    repo: WorkoutRepository = Depends(get_repository),
):
    sessions = repo.list_sessions(user)
    today = _today(today)

    if format == "json":
        content, media_type = export_json(sessions), "application/json"
    elif format == "csv":
        if not sessions:
            raise HTTPException(404, "No workouts to export")
        content, media_type = export_csv(sessions), "text/csv"
    else:
        raise HTTPException(400, f"Unsupported export format: {format}")

    filename = export_filename(user, format, today)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================================
# AI-Assisted Entry
# ============================================================

@app.post("/api/generate-workout", response_model=GenerateWorkoutResponse)
async def api_generate_workout(request: GenerateWorkoutRequest):
    """Convert a free-text description into a workout object."""
    if not settings.GOOGLE_API_KEY:
        return JSONResponse(status_code=500, content={"success": False, "error": "API key not configured"})

    try:
        workout = generate_workout_from_description(request.description, request.user, date.today())
    except WorkoutGenerationError as e:
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
    except Exception as e:
        logger.error(f"Gemini request failed: {e}")
        return JSONResponse(status_code=502, content={"success": False, "error": "AI request failed"})

    return GenerateWorkoutResponse(success=True, workout=workout)


@app.post("/api/analyze-workout", response_model=AnalyzeWorkoutResponse, response_model_by_alias=True)
async def api_analyze_workout(request: AnalyzeWorkoutRequest):
    """One turn of the conversational workout logger; never fails the chat."""
    if not settings.GOOGLE_API_KEY:
        return JSONResponse(status_code=500, content={"error": "Gemini API key not configured"})

    try:
        return analyze_workout_message(
            request.user_input,
            request.current_workout_data,
            request.conversation_stage,
            request.user,
            date.today(),
        )
    except Exception as e:
        logger.error(f"Error in workout analysis: {e}")
        return analysis_error_response()


# ============================================================
# Health Check
# ============================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": "1.0.0"
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "GymTrack API",
        "version": "1.0.0",
        "docs": "/docs"
    }


# ============================================================
# Run Server
# ============================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
