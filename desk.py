#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# desk.py
# 계산기, 시계, 날씨 카드를 한 창에 모은 진입점

import sys
import argparse
import logging
from typing import List, Optional

from PyQt5.QtWidgets import QApplication, QHBoxLayout, QVBoxLayout, QWidget

from calculator_window import CalculatorWindow
from clock import ClockModel, ClockWidget, is_valid_timezone
from weather import WeatherCard

LOG_PATH = 'calc_desk.log'


def setup_logger(log_path=LOG_PATH, verbose=False):
    """콘솔과 파일(UTF-8)로 동시에 로그를 남기는 로거를 설정한다."""
    logger = logging.getLogger('calc_desk')
    if logger.handlers:
        return logger

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 콘솔
    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(level)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    # 파일(UTF-8)
    fh = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    fh.setLevel(level)
    fh.setFormatter(formatter)
    logger.addHandler(fh)

    return logger


def timezone_arg(value):
    if not is_valid_timezone(value):
        raise argparse.ArgumentTypeError('알 수 없는 시간대: {}'.format(value))
    return value


class DeskWindow(QWidget):
    """계산기 + (선택) 시계/날씨 카드"""

    def __init__(self, clock_model: Optional[ClockModel] = None,
                 show_clock: bool = True, show_weather: bool = True) -> None:
        super().__init__()
        self.setWindowTitle('Calc Desk')
        root = QHBoxLayout()
        self.setLayout(root)

        self.calculator = CalculatorWindow()
        root.addWidget(self.calculator)

        self.clock = None
        self.weather = None
        if show_clock or show_weather:
            side = QVBoxLayout()
            if show_clock:
                self.clock = ClockWidget(clock_model)
                side.addWidget(self.clock)
            if show_weather:
                self.weather = WeatherCard()
                side.addWidget(self.weather)
            side.addStretch(1)
            root.addLayout(side)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='사칙연산 계산기와 시계, 날씨 카드를 보여줍니다.'
    )
    parser.add_argument('--log', default=LOG_PATH,
                        help='로그 파일 경로(기본값: calc_desk.log)')
    parser.add_argument('--timezone', type=timezone_arg, default=None,
                        help='로컬 시간대(IANA 이름, 기본값: TZ 환경변수 또는 UTC)')
    parser.add_argument('--24h', dest='twenty_four_hour', action='store_true',
                        help='시계를 24시간 형식으로 시작')
    parser.add_argument('--no-clock', action='store_true', help='시계 숨김')
    parser.add_argument('--no-weather', action='store_true', help='날씨 카드 숨김')
    parser.add_argument('--verbose', action='store_true', help='디버그 로그 출력')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = setup_logger(args.log, args.verbose)

    try:
        app = QApplication.instance() or QApplication(sys.argv[:1])
        clock_model = ClockModel(local_timezone=args.timezone)
        clock_model.is_twenty_four_hour = args.twenty_four_hour
        window = DeskWindow(
            clock_model,
            show_clock=not args.no_clock,
            show_weather=not args.no_weather,
        )
        window.show()
        logger.info('[시작] 로컬 시간대=%s', clock_model.local_timezone)
        status = app.exec()
    except Exception:
        logger.exception('[오류] 실행 중 예외가 발생했습니다.')
        return 1

    logger.info('[종료] 상태=%d', status)
    return status


if __name__ == '__main__':
    sys.exit(main())
