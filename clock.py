# clock.py
# Python 3.x, PyQt5
# 선택한 IANA 시간대의 현재 시각을 1초마다 갱신해 보여준다

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from PyQt5.QtCore import QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QCloseEvent, QFont
from PyQt5.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

# 로컬 시간대와 함께 빠르게 고를 수 있는 기본 시간대
BASE_TIMEZONES = (
    'UTC',
    'America/Los_Angeles',
    'America/Chicago',
    'America/New_York',
    'Europe/London',
    'Europe/Paris',
    'Asia/Dubai',
    'Asia/Kolkata',
    'Asia/Tokyo',
    'Australia/Sydney',
)
TICK_INTERVAL_MS = 1000
LOCALTIME_PATH = Path('/etc/localtime')

logger = logging.getLogger('calc_desk.clock')


def is_valid_timezone(zone: Optional[str]) -> bool:
    if not zone:
        return False
    try:
        ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def system_timezone(localtime: Optional[Path] = None) -> Optional[str]:
    """/etc/localtime 링크가 가리키는 zoneinfo/<지역>/<도시> 이름"""
    localtime = localtime or LOCALTIME_PATH
    try:
        target = localtime.resolve(strict=True)
    except (OSError, RuntimeError):
        return None

    parts = target.parts
    if 'zoneinfo' not in parts:
        return None
    # 마지막 'zoneinfo' 뒤의 경로가 시간대 이름
    index = len(parts) - 1 - parts[::-1].index('zoneinfo')
    names = list(parts[index + 1:])
    if names and names[0] in ('posix', 'right'):
        names = names[1:]
    zone = '/'.join(names)
    return zone if is_valid_timezone(zone) else None


def detect_local_timezone() -> str:
    # TZ 환경변수 → 시스템 시간대 → UTC
    zone = os.environ.get('TZ', '').lstrip(':')
    if is_valid_timezone(zone):
        return zone
    return system_timezone() or 'UTC'


def _plural(n: int, word: str) -> str:
    return '{} {}'.format(n, word if n == 1 else word + 's')


class ClockModel:
    """시계 표시 로직(시간대 목록, 라벨, 오프셋, 12/24시간 형식)"""

    def __init__(self, local_timezone: Optional[str] = None,
                 timezones: Sequence[str] = BASE_TIMEZONES) -> None:
        if local_timezone is None:
            local_timezone = detect_local_timezone()
        if not is_valid_timezone(local_timezone):
            raise ValueError('unknown time zone: {}'.format(local_timezone))
        self.local_timezone = local_timezone
        self.timezones = tuple(timezones)
        self.selected_timezone = local_timezone
        self.is_twenty_four_hour = False

    @property
    def hour_format(self) -> str:
        return '24' if self.is_twenty_four_hour else '12'

    def zones(self) -> List[str]:
        # 로컬 시간대를 맨 앞에 두고 중복 제거
        seen = []
        for zone in (self.local_timezone,) + self.timezones:
            if zone not in seen:
                seen.append(zone)
        return seen

    def timezone_options(self, now: Optional[datetime] = None) -> List[Tuple[str, str]]:
        return [(zone, self.format_zone_label(zone, now)) for zone in self.zones()]

    def select_timezone(self, zone: str) -> None:
        if not is_valid_timezone(zone):
            raise ValueError('unknown time zone: {}'.format(zone))
        self.selected_timezone = zone

    def selected_timezone_label(self, now: Optional[datetime] = None) -> str:
        if self.selected_timezone in self.zones():
            return self.format_zone_label(self.selected_timezone, now)
        return self.selected_timezone

    def utc_offset_minutes(self, zone: str, now: Optional[datetime] = None) -> float:
        now = now or datetime.now(timezone.utc)
        offset = now.astimezone(ZoneInfo(zone)).utcoffset()
        return offset.total_seconds() / 60

    def difference_from_local(self, zone: str, now: Optional[datetime] = None) -> float:
        return self.utc_offset_minutes(zone, now) - self.utc_offset_minutes(self.local_timezone, now)

    def relative_description(self, now: Optional[datetime] = None) -> str:
        diff = self.difference_from_local(self.selected_timezone, now)
        if abs(diff) < 1:
            return 'Matches your local time'

        direction = 'ahead' if diff > 0 else 'behind'
        total = abs(round(diff))
        hours, minutes = divmod(total, 60)

        parts = []
        if hours:
            parts.append(_plural(hours, 'hour'))
        if minutes:
            parts.append(_plural(minutes, 'minute'))
        return '{} {}'.format(' '.join(parts), direction)

    def format_zone_offset(self, zone: str, now: Optional[datetime] = None) -> str:
        offset = round(self.utc_offset_minutes(zone, now))
        sign = '+' if offset >= 0 else '-'
        hours, minutes = divmod(abs(offset), 60)
        return 'UTC{}{:02d}:{:02d}'.format(sign, hours, minutes)

    def format_zone_label(self, zone: str, now: Optional[datetime] = None) -> str:
        if zone == self.local_timezone:
            return 'Local ({})'.format(zone)
        return '{} ({})'.format(zone.replace('_', ' '), self.format_zone_offset(zone, now))

    def formatted_time(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        local = now.astimezone(ZoneInfo(self.selected_timezone))
        if self.is_twenty_four_hour:
            return local.strftime('%H:%M:%S')
        return local.strftime('%I:%M:%S %p')


class ClockWidget(QWidget):
    """PyQt5 UI: ClockModel + 1초 타이머"""

    # 상위 창이 고급 설정을 제공할 수 있도록 알림
    preferences_requested = pyqtSignal()

    def __init__(self, model: Optional[ClockModel] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.model = model or ClockModel()
        self._build_ui()
        self.timer = QTimer(self)
        self.timer.setInterval(TICK_INTERVAL_MS)
        self.timer.timeout.connect(self.refresh)
        self.timer.start()
        self.refresh()

    def _build_ui(self) -> None:
        root = QVBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(6)
        self.setLayout(root)

        self.time_label = QLabel()
        self.time_label.setAlignment(Qt.AlignCenter)
        font = QFont(self.time_label.font())
        font.setPointSize(24)
        self.time_label.setFont(font)
        root.addWidget(self.time_label)

        self.zone_label = QLabel()
        self.zone_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self.zone_label)

        self.relative_label = QLabel()
        self.relative_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self.relative_label)

        self.zone_combo = QComboBox()
        for value, label in self.model.timezone_options():
            self.zone_combo.addItem(label, value)
        self.zone_combo.setCurrentIndex(self.zone_combo.findData(self.model.selected_timezone))
        self.zone_combo.currentIndexChanged.connect(self.on_timezone_change)
        root.addWidget(self.zone_combo)

        row = QHBoxLayout()
        self.format_toggle = QCheckBox('24-hour')
        self.format_toggle.setChecked(self.model.is_twenty_four_hour)
        self.format_toggle.toggled.connect(self.on_format_toggle)
        row.addWidget(self.format_toggle)

        refresh_btn = QPushButton('Refresh')
        refresh_btn.clicked.connect(lambda checked=False: self.refresh())
        row.addWidget(refresh_btn)

        self.preferences_button = QPushButton('Preferences')
        self.preferences_button.clicked.connect(lambda checked=False: self.preferences_requested.emit())
        row.addWidget(self.preferences_button)
        root.addLayout(row)

    def on_timezone_change(self, index: int) -> None:
        zone = self.zone_combo.itemData(index)
        if zone:
            self.model.select_timezone(zone)
            logger.debug('time zone selected: %s', zone)
            self.refresh()

    def on_format_toggle(self, checked: bool) -> None:
        self.model.is_twenty_four_hour = checked
        self.refresh()

    def refresh(self) -> None:
        now = datetime.now(timezone.utc)
        self.time_label.setText(self.model.formatted_time(now))
        self.zone_label.setText(self.model.selected_timezone_label(now))
        self.relative_label.setText(self.model.relative_description(now))

    def closeEvent(self, event: QCloseEvent) -> None:
        self.timer.stop()
        super().closeEvent(event)
