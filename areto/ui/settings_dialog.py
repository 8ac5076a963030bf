"""Settings dialog for the user id and API address."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring the identity and server used by the client."""

    def __init__(self, parent=None, user_id: str = "", api_base_url: str = "") -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)

        self._user_id = user_id
        self._api_base_url = api_base_url

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        identity_group = QGroupBox("Identity")
        identity_layout = QHBoxLayout()
        identity_group.setLayout(identity_layout)
        user_label = QLabel("User id:")
        user_label.setToolTip("Quizzes you create are owned by this id; only the owner can edit or delete them.")
        self.user_id_input = QLineEdit(self._user_id)
        self.user_id_input.setPlaceholderText("e.g. alice")
        identity_layout.addWidget(user_label)
        identity_layout.addWidget(self.user_id_input, stretch=1)
        layout.addWidget(identity_group)

        server_group = QGroupBox("Server")
        server_layout = QHBoxLayout()
        server_group.setLayout(server_layout)
        url_label = QLabel("API URL:")
        url_label.setToolTip("Base address of the quiz API, including the /api prefix.")
        self.api_url_input = QLineEdit(self._api_base_url)
        server_layout.addWidget(url_label)
        server_layout.addWidget(self.api_url_input, stretch=1)
        layout.addWidget(server_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_user_id(self) -> str:
        return self.user_id_input.text().strip()

    def get_api_base_url(self) -> str:
        """Get the API base URL, or the previous value when left empty."""
        return self.api_url_input.text().strip() or self._api_base_url
