"""ORM models - import all so Base.metadata is complete for migrations."""

from fitsnap.models.community import CommunityComment, CommunityReaction
from fitsnap.models.exercise import Exercise
from fitsnap.models.profile import Profile
from fitsnap.models.progress import PersonalRecord, UserGoals, UserSettings
from fitsnap.models.workout import Workout, WorkoutExercise, WorkoutSet

__all__ = [
    "CommunityComment",
    "CommunityReaction",
    "Exercise",
    "PersonalRecord",
    "Profile",
    "UserGoals",
    "UserSettings",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
