"""Qt main window switching between dashboard, builder, quiz, results and leaderboard."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import AretoApiClient
from areto.client.session_context import QuizSessionContext
from areto.config import Settings
from areto.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from areto.constants.ui_constants import (
    MODE_BUTTON_CREATE,
    MODE_BUTTON_DASHBOARD,
    MODE_BUTTON_LEADERBOARD,
    NO_USER_ID_MESSAGE,
    WINDOW_TITLE,
)
from areto.ui.components.builder_panel import BuilderPanel
from areto.ui.components.dashboard_panel import DashboardPanel
from areto.ui.components.leaderboard_panel import LeaderboardPanel
from areto.ui.components.results_panel import ResultsPanel
from areto.ui.components.taking_panel import TakingPanel
from areto.ui.dialog_helpers import show_info, show_toast
from areto.ui.settings_dialog import SettingsDialog


class PlayerMode(Enum):
    """High-level UI mode for the player window."""

    DASHBOARD = auto()
    BUILDER = auto()
    TAKING = auto()
    RESULTS = auto()
    LEADERBOARD = auto()


class PlayerMainWindow(QMainWindow):
    """Main Qt window orchestrating the five application views."""

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(960, 720)

        self._user_id = settings.user_id
        self._api_base_url = settings.api_base_url
        self.api_client = AretoApiClient(self._api_base_url)
        self.session_context = QuizSessionContext()
        self._mode = PlayerMode.DASHBOARD

        self._build_ui()
        self._apply_user_id()
        self._show_dashboard()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)

        self.dashboard_panel = DashboardPanel(
            self.api_client,
            on_play=self._start_quiz,
            on_edit=self._edit_quiz,
            parent=self,
        )
        self.builder_panel = BuilderPanel(
            self.api_client,
            on_saved=self._show_dashboard,
            on_cancel=self._show_dashboard,
            parent=self,
        )
        self.taking_panel = TakingPanel(
            self.api_client,
            self.session_context,
            on_finished=self._show_results,
            on_quit=self._leave_quiz,
            parent=self,
        )
        self.results_panel = ResultsPanel(
            self.api_client,
            self.session_context,
            on_retake=self._start_quiz,
            on_back=self._show_dashboard,
            parent=self,
        )
        self.leaderboard_panel = LeaderboardPanel(self.api_client, parent=self)

        self._panels = {
            PlayerMode.DASHBOARD: self.dashboard_panel,
            PlayerMode.BUILDER: self.builder_panel,
            PlayerMode.TAKING: self.taking_panel,
            PlayerMode.RESULTS: self.results_panel,
            PlayerMode.LEADERBOARD: self.leaderboard_panel,
        }
        for panel in self._panels.values():
            self.mode_stack.addWidget(panel)

        root_layout.addWidget(self.mode_stack)
        self.statusBar()

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.dashboard_button = QPushButton(MODE_BUTTON_DASHBOARD, self)
        self.dashboard_button.setCheckable(True)
        self.dashboard_button.clicked.connect(self._show_dashboard)
        button_row.addWidget(self.dashboard_button)

        self.create_button = QPushButton(MODE_BUTTON_CREATE, self)
        self.create_button.setCheckable(True)
        self.create_button.clicked.connect(self._create_quiz)
        button_row.addWidget(self.create_button)

        self.leaderboard_button = QPushButton(MODE_BUTTON_LEADERBOARD, self)
        self.leaderboard_button.setCheckable(True)
        self.leaderboard_button.clicked.connect(self._show_leaderboard)
        button_row.addWidget(self.leaderboard_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: PlayerMode) -> None:
        if self._mode is PlayerMode.TAKING and mode is not PlayerMode.TAKING:
            self.taking_panel.stop_session()
        self._mode = mode
        self.dashboard_button.setChecked(mode is PlayerMode.DASHBOARD)
        self.create_button.setChecked(mode is PlayerMode.BUILDER)
        self.leaderboard_button.setChecked(mode is PlayerMode.LEADERBOARD)

        # Navigation is locked while a quiz is being played
        in_quiz = mode is PlayerMode.TAKING
        for button in (self.dashboard_button, self.create_button, self.leaderboard_button, self.settings_button):
            button.setEnabled(not in_quiz)

        self.mode_stack.setCurrentWidget(self._panels[mode])

    def _show_dashboard(self) -> None:
        self._set_mode(PlayerMode.DASHBOARD)
        self.dashboard_panel.refresh()

    def _show_leaderboard(self) -> None:
        self._set_mode(PlayerMode.LEADERBOARD)
        self.leaderboard_panel.refresh()

    def _create_quiz(self) -> None:
        if not self._user_id:
            show_toast(self, NO_USER_ID_MESSAGE)
            self.create_button.setChecked(False)
            return
        self.builder_panel.start_new()
        self._set_mode(PlayerMode.BUILDER)

    def _edit_quiz(self, quiz_id: str) -> None:
        if self.builder_panel.load_for_edit(quiz_id):
            self._set_mode(PlayerMode.BUILDER)

    def _start_quiz(self, quiz_id: str) -> None:
        self.results_panel.begin_session()
        self._set_mode(PlayerMode.TAKING)
        self.taking_panel.start_quiz(quiz_id)

    def _leave_quiz(self) -> None:
        self.session_context.reset()
        self._show_dashboard()

    def _show_results(self) -> None:
        self._set_mode(PlayerMode.RESULTS)
        self.results_panel.show_results()

    def _apply_user_id(self) -> None:
        self.dashboard_panel.set_user_id(self._user_id)
        self.builder_panel.set_user_id(self._user_id)
        self.results_panel.set_user_id(self._user_id)
        who = self._user_id or "not set"
        self.setWindowTitle(f"{WINDOW_TITLE} · user: {who}")

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(self, self._user_id, self._api_base_url)
        if not dialog.exec():
            return
        self._user_id = dialog.get_user_id()
        new_url = dialog.get_api_base_url()
        if new_url != self._api_base_url:
            self._api_base_url = new_url
            self.api_client = AretoApiClient(new_url)
            for panel in self._panels.values():
                panel.set_api_client(self.api_client)
        self._apply_user_id()
        if self._mode is PlayerMode.DASHBOARD:
            self.dashboard_panel.refresh()

    def closeEvent(self, event) -> None:
        self.taking_panel.stop_session()
        super().closeEvent(event)
