"""Tests for the clock model and widget."""

import re
from datetime import datetime, timezone

import pytest

import clock
from clock import (
    BASE_TIMEZONES,
    ClockModel,
    ClockWidget,
    detect_local_timezone,
    system_timezone,
)

WINTER = datetime(2024, 1, 15, 13, 5, 9, tzinfo=timezone.utc)


def test_options_put_local_zone_first_without_duplicates() -> None:
    model = ClockModel(local_timezone='Asia/Seoul')
    options = model.timezone_options(WINTER)

    assert options[0] == ('Asia/Seoul', 'Local (Asia/Seoul)')
    assert len(options) == len(BASE_TIMEZONES) + 1

    model = ClockModel(local_timezone='UTC')
    options = model.timezone_options(WINTER)

    assert options[0] == ('UTC', 'Local (UTC)')
    assert len(options) == len(BASE_TIMEZONES)


def test_zone_offsets() -> None:
    model = ClockModel(local_timezone='UTC')

    assert model.format_zone_offset('Asia/Tokyo', WINTER) == 'UTC+09:00'
    assert model.format_zone_offset('Asia/Kolkata', WINTER) == 'UTC+05:30'
    assert model.format_zone_offset('America/New_York', WINTER) == 'UTC-05:00'
    assert model.format_zone_offset('UTC', WINTER) == 'UTC+00:00'


def test_zone_label_replaces_underscores() -> None:
    model = ClockModel(local_timezone='UTC')

    assert model.format_zone_label('America/Los_Angeles', WINTER) == 'America/Los Angeles (UTC-08:00)'


def test_relative_description() -> None:
    model = ClockModel(local_timezone='UTC')
    assert model.relative_description(WINTER) == 'Matches your local time'

    model.select_timezone('Asia/Kolkata')
    assert model.relative_description(WINTER) == '5 hours 30 minutes ahead'

    model = ClockModel(local_timezone='Asia/Tokyo')
    model.select_timezone('UTC')
    assert model.relative_description(WINTER) == '9 hours behind'

    model = ClockModel(local_timezone='Europe/London')
    model.select_timezone('Europe/Paris')
    assert model.relative_description(WINTER) == '1 hour ahead'


def test_hour_format_and_formatted_time() -> None:
    model = ClockModel(local_timezone='UTC')

    assert model.hour_format == '12'
    assert model.formatted_time(WINTER) == '01:05:09 PM'

    model.is_twenty_four_hour = True
    assert model.hour_format == '24'
    assert model.formatted_time(WINTER) == '13:05:09'

    model.select_timezone('Asia/Tokyo')
    assert model.formatted_time(WINTER) == '22:05:09'


def test_unknown_zones_are_rejected() -> None:
    model = ClockModel(local_timezone='UTC')

    with pytest.raises(ValueError):
        model.select_timezone('Mars/Olympus_Mons')
    assert model.selected_timezone == 'UTC'

    with pytest.raises(ValueError):
        ClockModel(local_timezone='Nowhere/Special')


def _link_localtime(tmp_path, zone):
    zone_file = tmp_path / 'usr' / 'share' / 'zoneinfo' / zone
    zone_file.parent.mkdir(parents=True)
    zone_file.write_bytes(b'TZif')
    link = tmp_path / 'localtime'
    link.symlink_to(zone_file)
    return link


def test_detect_local_timezone(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(clock, 'LOCALTIME_PATH', tmp_path / 'missing')

    monkeypatch.setenv('TZ', 'Asia/Tokyo')
    assert detect_local_timezone() == 'Asia/Tokyo'

    monkeypatch.setenv('TZ', 'not a zone')
    assert detect_local_timezone() == 'UTC'

    monkeypatch.delenv('TZ')
    assert detect_local_timezone() == 'UTC'


def test_detect_local_timezone_uses_system_zone_without_tz(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv('TZ', raising=False)
    monkeypatch.setattr(clock, 'LOCALTIME_PATH', _link_localtime(tmp_path, 'Asia/Seoul'))

    assert detect_local_timezone() == 'Asia/Seoul'

    model = ClockModel()
    assert model.local_timezone == 'Asia/Seoul'
    assert model.timezone_options(WINTER)[0] == ('Asia/Seoul', 'Local (Asia/Seoul)')

    model.select_timezone('Asia/Tokyo')
    assert model.relative_description(WINTER) == 'Matches your local time'


def test_system_timezone_strips_posix_prefix(tmp_path) -> None:
    assert system_timezone(_link_localtime(tmp_path, 'posix/Europe/Paris')) == 'Europe/Paris'


def test_system_timezone_rejects_unknown_targets(tmp_path) -> None:
    assert system_timezone(tmp_path / 'missing') is None

    plain = tmp_path / 'localtime'
    plain.write_bytes(b'TZif')
    assert system_timezone(plain) is None

    assert system_timezone(_link_localtime(tmp_path / 'bogus', 'Mars/Base')) is None


def test_widget_follows_selection_and_format(qapp) -> None:
    widget = ClockWidget(ClockModel(local_timezone='UTC'))

    assert widget.zone_combo.count() == len(BASE_TIMEZONES)
    assert widget.zone_label.text() == 'Local (UTC)'
    assert widget.timer.isActive()

    widget.zone_combo.setCurrentIndex(widget.zone_combo.findData('Asia/Tokyo'))
    assert widget.model.selected_timezone == 'Asia/Tokyo'
    assert widget.relative_label.text() == '9 hours ahead'

    widget.format_toggle.setChecked(True)
    assert widget.model.hour_format == '24'
    assert re.fullmatch(r'\d{2}:\d{2}:\d{2}', widget.time_label.text())


def test_widget_preferences_signal_and_close(qapp) -> None:
    widget = ClockWidget(ClockModel(local_timezone='UTC'))
    requested = []
    widget.preferences_requested.connect(lambda: requested.append(True))

    widget.preferences_button.click()
    assert requested == [True]

    widget.show()
    widget.close()
    assert not widget.timer.isActive()
