"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation

Usage:
    from tests.fakes import create_progression_repo

    repo = create_progression_repo(user_id="user1", num_sessions=4)
"""
from tests.fakes.progression_repository import (
    FakeProgressionRepository,
    create_test_workout_logs,
)


def create_progression_repo(
    *,
    user_id: str = "test_user",
    num_sessions: int = 0,
    exercise_name: str = "Bench Press",
) -> FakeProgressionRepository:
    """
    Create a FakeProgressionRepository with optional pre-populated workout logs.

    Args:
        user_id: User ID for generated logs
        num_sessions: Number of sample sessions to create
        exercise_name: Exercise name for the generated sessions

    Returns:
        Pre-populated FakeProgressionRepository
    """
    repo = FakeProgressionRepository()

    if num_sessions > 0:
        repo.seed_workout_logs(
            user_id,
            create_test_workout_logs(exercise_name=exercise_name, num_sessions=num_sessions),
        )

    return repo


__all__ = [
    "FakeProgressionRepository",
    "create_progression_repo",
    "create_test_workout_logs",
]
