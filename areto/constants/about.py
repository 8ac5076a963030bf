"""Static metadata describing Areto."""

from areto import __version__

APP_NAME = "Areto"
APP_VERSION = __version__
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Areto lets you build multiple-choice quizzes, play quizzes made by others, "
    "and follow how every quiz performs over time."
)

HELP_TEXT = (
    "Create a quiz from the dashboard with a title, an optional icon and an optional "
    "time limit between 5 and 300 seconds per question. Every question needs exactly "
    "four options and one correct answer.\n\n"
    "Only the creator of a quiz can edit or delete it. Set your user id under Settings."
)
