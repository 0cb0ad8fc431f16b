#!/usr/bin/env python3
"""Script to populate the database with test workout data."""

import os
import sys
from datetime import date, timedelta

from dotenv import load_dotenv

# Add src to path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from database import SessionLocal, init_db
from errors import WorkoutLogError
from exercise_service import add_exercise
from ids import compose_exercise_id, compose_set_id
from models import WorkoutDB
from typedefs import WorkoutExercise, WorkoutSet

# Load environment variables
load_dotenv()

# Exercise type -> (reps, weight) of each set
SAMPLE_EXERCISES = {
    "bench-press": [(6, 100), (5, 100), (5, 100)],
    "squat": [(5, 140), (5, 140), (5, 140)],
    "barbell-row": [(8, 80), (8, 80)],
    "deadlift": [(3, 180)],
}


def build_exercise(day: date, exercise_type: str, sets) -> WorkoutExercise:
    exercise_id = compose_exercise_id(day, exercise_type)
    return WorkoutExercise(
        id=exercise_id,
        date=day,
        type=exercise_type,
        sets=[
            WorkoutSet(
                id=compose_set_id(exercise_id, i + 1),
                reps=reps,
                weight=weight,
                date=day,
                type=exercise_type,
            )
            for i, (reps, weight) in enumerate(sets)
        ],
    )


def create_test_workouts(days: int, clear: bool):
    """Log the sample exercises on every other day, ending today."""
    init_db()
    db = SessionLocal()
    try:
        if clear:
            for workout in db.query(WorkoutDB).all():
                db.delete(workout)
            db.commit()
            print("Cleared existing workouts")

        today = date.today()
        for offset in range(0, days, 2):
            day = today - timedelta(days=offset)
            for exercise_type, sets in SAMPLE_EXERCISES.items():
                exercise = build_exercise(day, exercise_type, sets)
                # Seeding has no read cache to keep in sync
                add_exercise(db, lambda update: None, exercise)
            print(f"  - Logged {len(SAMPLE_EXERCISES)} exercises on {day}")

        print("\nDatabase populated successfully!")

    except WorkoutLogError as e:
        print(f"Error populating database: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Populate database with test data")
    parser.add_argument(
        "--days",
        type=int,
        default=14,
        help="How many days back to log workouts for (default: 14)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all existing workouts first",
    )

    args = parser.parse_args()
    create_test_workouts(args.days, args.clear)
