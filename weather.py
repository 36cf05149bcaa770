# weather.py
# Python 3.x, PyQt5
# 실시간 날씨 연동 전까지 정적 예보 데이터로 동작하는 카드

from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget


@dataclass(frozen=True)
class Forecast:
    temperature: int = 72
    unit: str = 'F'
    condition: str = 'Partly Cloudy'
    location: str = 'San Francisco, CA'
    icon: str = '☁'

    @property
    def display_temperature(self) -> str:
        return '{}°{}'.format(self.temperature, self.unit)

    @property
    def display_summary(self) -> str:
        return '{} · {}'.format(self.condition, self.location)


DEFAULT_FORECAST = Forecast()


class WeatherCard(QWidget):
    def __init__(self, forecast: Forecast = DEFAULT_FORECAST,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._build_ui()
        self.set_forecast(forecast)

    def _build_ui(self) -> None:
        root = QHBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        self.setLayout(root)

        self.icon_label = QLabel()
        font = QFont(self.icon_label.font())
        font.setPointSize(32)
        self.icon_label.setFont(font)
        root.addWidget(self.icon_label)

        text = QVBoxLayout()
        self.temperature_label = QLabel()
        font = QFont(self.temperature_label.font())
        font.setPointSize(22)
        self.temperature_label.setFont(font)
        text.addWidget(self.temperature_label)

        self.summary_label = QLabel()
        self.summary_label.setAlignment(Qt.AlignLeft)
        text.addWidget(self.summary_label)
        root.addLayout(text)

    def set_forecast(self, forecast: Forecast) -> None:
        self.forecast = forecast
        self.icon_label.setText(forecast.icon)
        self.temperature_label.setText(forecast.display_temperature)
        self.summary_label.setText(forecast.display_summary)
