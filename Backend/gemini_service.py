"""
GymTrack Gemini Service
Turns free-text workout descriptions into structured workouts and drives
the conversational workout logger, using Google Gemini.
"""
import json
import logging
import re
import uuid
from datetime import date, datetime
from typing import Any, Optional
from google import genai
from google.genai import types

from config import settings
from models import User, WorkoutType, ConversationStage, AnalyzeWorkoutResponse
from muscle_map import get_all_muscle_groups

logger = logging.getLogger(__name__)


class WorkoutGenerationError(Exception):
    """The model answered, but not with a usable workout."""


# ============================================================
# Client Initialization
# ============================================================

_client: Optional[genai.Client] = None


def get_client() -> genai.Client:
    """Get Gemini client (singleton)."""
    global _client
    if _client is None:
        _client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    return _client


# ============================================================
# Prompts
# ============================================================

GENERATE_WORKOUT_PROMPT = """
You are a professional fitness tracker assistant. Convert the following workout description into a structured JSON format.

Workout Description: "{description}"

Please create a JSON object with this exact structure:
{{
  "workoutType": {workout_types},
  "date": "{today}",
  "duration": <estimated_duration_in_minutes>,
  "exercises": [
    {{
      "name": "<exercise_name>",
      "muscleGroups": ["<muscle_group1>", "<muscle_group2>"],
      "sets": [
        {{
          "reps": <number>,
          "weight": <weight_or_0_if_bodyweight>
        }}
      ]
    }}
  ],
  "rating": <estimated_difficulty_1_to_10>,
  "notes": "<any_additional_notes>"
}}

Muscle groups must be from: {muscle_groups}.

Workout types:
- "arms" for biceps, triceps, forearms focused workouts
- "push" for chest, shoulders, triceps focused workouts
- "pull" for back, biceps focused workouts
- "legs" for quads, hamstrings, glutes, calves focused workouts

Respond with ONLY the JSON object, no other text.
"""

ANALYZE_WORKOUT_PROMPT = """
You are a helpful workout logging assistant for {user}. Your job is to have a conversation with the user to gather complete workout information and then generate a structured workout JSON.

CURRENT CONVERSATION STAGE: {stage}

CURRENT WORKOUT DATA:
{workout_data}

INSTRUCTIONS:
1. Be conversational and friendly
2. If this is the initial stage, analyze their input for workout details
3. If information is missing, ask specific follow-up questions
4. When you have enough information, confirm the details
5. Finally, generate the complete workout JSON

WORKOUT DATA STRUCTURE NEEDED:
- workoutType: {workout_types}
- exercises: Array of exercises with name and sets (reps, weight, optional rpe)
- duration: number in minutes
- notes: optional string
- rating: optional number 1-10
- date: {today} if not specified

RESPONSE FORMAT:
Always respond with a JSON object containing:
{{
  "response": "Your conversational response to the user",
  "workoutData": {{ updated workout data object or null }},
  "stage": "initial" | "gathering" | "confirming" | "complete",
  "finalWorkout": {{ complete workout object when stage is "complete" or null }}
}}

USER INPUT: "{user_input}"

Please analyze this input and respond appropriately.
"""

FALLBACK_REPLY = (
    "I understand you want to log your workout. Could you tell me more details about "
    "the exercises you did, including sets, reps, and weights?"
)
ERROR_REPLY = "I'm having trouble processing that right now. Could you try describing your workout again?"
EMPTY_REPLY = "Could you provide more details about your workout?"


def _workout_type_choices() -> str:
    return " | ".join(f'"{t.value}"' for t in WorkoutType)


def _strip_code_fences(text: str) -> str:
    return re.sub(r"```(?:json)?\n?|\n?```", "", text).strip()


def _as_dict(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) and value else None


# ============================================================
# Workout Generation
# ============================================================

def generate_workout_from_description(description: str, user: User, today: date) -> dict:
    """
    Ask Gemini for a workout JSON matching the description.
    The result is tagged with user, id and timestamp but not validated;
    callers validate it before storing.
    """
    client = get_client()

    prompt = GENERATE_WORKOUT_PROMPT.format(
        description=description,
        today=today.isoformat(),
        workout_types=_workout_type_choices(),
        muscle_groups=", ".join(m.value for m in get_all_muscle_groups()),
    )

    response = client.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=settings.GEMINI_TEMPERATURE,
            top_k=1,
            top_p=1,
            max_output_tokens=2048,
        )
    )

    text = (response.text or "").strip()
    try:
        workout = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse generated workout: {text[:200]!r}")
        raise WorkoutGenerationError("Failed to parse AI response as JSON") from e

    if not isinstance(workout, dict):
        raise WorkoutGenerationError("AI response is not a workout object")

    workout["user"] = User(user).value
    workout["timestamp"] = datetime.utcnow().isoformat()
    workout["id"] = f"workout_{uuid.uuid4().hex[:12]}"
    return workout


# ============================================================
# Conversational Logging
# ============================================================

def analyze_workout_message(
        user_input: str,
        current_workout_data: dict,
        stage: ConversationStage,
        user: User,
        today: date,
) -> AnalyzeWorkoutResponse:
    """
    Run one turn of the workout-logging conversation.
    A reply that carries no parsable JSON gets a canned follow-up question
    instead of an error, so the chat keeps going.
    """
    client = get_client()
    stage = ConversationStage(stage)

    prompt = ANALYZE_WORKOUT_PROMPT.format(
        user=User(user).value,
        stage=stage.value,
        workout_data=json.dumps(current_workout_data or {}, indent=2),
        workout_types=_workout_type_choices(),
        today=today.isoformat(),
        user_input=user_input,
    )

    response = client.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=0.7,
            max_output_tokens=2048,
        )
    )

    text = response.text or ""
    match = re.search(r"\{[\s\S]*\}", text)
    try:
        if not match:
            raise ValueError("No JSON found in response")
        parsed = json.loads(match.group(0))
        if not isinstance(parsed, dict):
            raise ValueError("Response JSON is not an object")
    except ValueError as e:
        logger.warning(f"Could not parse workout chat reply ({e}): {text[:200]!r}")
        parsed = {
            "response": FALLBACK_REPLY,
            "stage": ConversationStage.GATHERING if stage == ConversationStage.INITIAL else stage,
        }

    try:
        next_stage = ConversationStage(parsed.get("stage") or stage)
    except ValueError:
        next_stage = stage

    return AnalyzeWorkoutResponse(
        response=parsed.get("response") or EMPTY_REPLY,
        workout_data=_as_dict(parsed.get("workoutData")),
        stage=next_stage,
        final_workout=_as_dict(parsed.get("finalWorkout")),
    )


def analysis_error_response() -> AnalyzeWorkoutResponse:
    return AnalyzeWorkoutResponse(response=ERROR_REPLY, stage=ConversationStage.GATHERING)
