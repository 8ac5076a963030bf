"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Areto"
TICK_INTERVAL_MS: int = 1000
TOAST_DURATION_MS: int = 4000

MODE_BUTTON_DASHBOARD: str = "Dashboard"
MODE_BUTTON_CREATE: str = "Create Quiz"
MODE_BUTTON_LEADERBOARD: str = "Leaderboard"

DASHBOARD_EMPTY_STATE: str = "No quizzes yet. Create the first one!"
DASHBOARD_REFRESH_BUTTON: str = "Refresh"
DASHBOARD_PLAY_BUTTON: str = "Play"
DASHBOARD_EDIT_BUTTON: str = "Edit"
DASHBOARD_DELETE_BUTTON: str = "Delete"
SORT_LABELS: dict[str, str] = {
    "myQuizzes": "My quizzes first",
    "newest": "Newest",
    "popular": "Most popular",
    "mostPlayed": "Most played",
}

BUILDER_TITLE_PLACEHOLDER: str = "Quiz title"
BUILDER_ICON_PLACEHOLDER: str = "Icon (emoji)"
BUILDER_QUESTION_PLACEHOLDER: str = "Enter your question text (supports Markdown)."
BUILDER_ADD_QUESTION_BUTTON: str = "Add Question"
BUILDER_REMOVE_QUESTION_BUTTON: str = "Remove Question"
BUILDER_PREV_BUTTON: str = "Previous Question"
BUILDER_NEXT_BUTTON: str = "Next Question"
BUILDER_SAVE_BUTTON: str = "Save Quiz"
BUILDER_CANCEL_BUTTON: str = "Cancel"
BUILDER_TIME_LIMIT_CHECKBOX: str = "Time limit per question"

TAKING_SUBMIT_BUTTON: str = "Submit Answer"
TAKING_NEXT_BUTTON: str = "Next Question"
TAKING_RESULTS_BUTTON: str = "See Results"
TAKING_QUIT_BUTTON: str = "Quit"
TIME_UP_MESSAGE: str = "Time's up!"
TAKING_LOADING_MESSAGE: str = "Loading quiz..."

RESULTS_EMPTY_STATE: str = "No quiz results to show."
RESULTS_RETAKE_BUTTON: str = "Retake Quiz"
RESULTS_BACK_BUTTON: str = "Back to Dashboard"

LEADERBOARD_MOST_PLAYED_TITLE: str = "Most Played"
LEADERBOARD_HIGHEST_SUCCESS_TITLE: str = "Highest Success Rate"

NO_USER_ID_MESSAGE: str = "Set your user id under Settings before creating or editing quizzes."
