"""Application constants."""

# Community feed paging
COMMUNITY_FEED_DEFAULT_LIMIT = 20
COMMUNITY_FEED_MAX_LIMIT = 100

# Exercise search
EXERCISE_SEARCH_LIMIT = 10

DEFAULT_REACTION_TYPE = "like"
ANONYMOUS_USERNAME = "Anonymous User"

# Route access (page paths of the frontend)
AUTH_ROUTES = ("/login", "/register", "/auth/callback", "/debug-auth")
PROTECTED_ROUTES = (
    "/dashboard",
    "/workout",
    "/exercises",
    "/progress",
    "/community",
    "/settings",
    "/profile",
    "/history",
)
ADMIN_ROUTES = ("/admin",)

# Workout logging
DEFAULT_REST_SECONDS = 60
DEFAULT_THEME = "dark"
DEFAULT_MONTHLY_WORKOUT_TARGET = 12

# History
HISTORY_DEFAULT_LIMIT = 20
HISTORY_MAX_LIMIT = 100
HISTORY_EXPORT_LIMIT = 1000

# Progress
TOP_PERSONAL_RECORDS = 5
