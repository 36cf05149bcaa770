# calculator.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용
# UI 의존성 없음: 상태 머신과 사칙연산/부호/퍼센트/= 처리만 담당

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional

DEFAULT_DISPLAY = '0'
ERROR_DISPLAY = 'Error'
SIGNIFICANT_DIGITS = 12  # 부동소수점 잡음 제거용 유효 자릿수
OPERATORS = ('+', '-', '*', '/')
DIGITS = '0123456789'

logger = logging.getLogger('calc_desk.calculator')


class DivisionByZero(ZeroDivisionError):
    """0으로 나누기: 계산기에서 유일한 오류 종류"""


class ActionKind(Enum):
    DIGIT = 'digit'
    DECIMAL = 'decimal'
    OPERATOR = 'operator'
    EQUALS = 'equals'
    CLEAR = 'clear'
    TOGGLE_SIGN = 'toggleSign'
    PERCENT = 'percent'


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    value: Optional[str] = None


def digit(d: str) -> Action:
    return Action(ActionKind.DIGIT, d)


def operator(op: str) -> Action:
    return Action(ActionKind.OPERATOR, op)


DECIMAL = Action(ActionKind.DECIMAL)
EQUALS = Action(ActionKind.EQUALS)
CLEAR = Action(ActionKind.CLEAR)
TOGGLE_SIGN = Action(ActionKind.TOGGLE_SIGN)
PERCENT = Action(ActionKind.PERCENT)


@dataclass
class CalculatorState:
    display: str = DEFAULT_DISPLAY
    accumulator: Optional[float] = None  # 이전 값(좌항)
    pending_operator: Optional[str] = None  # 대기 연산자: '+', '-', '*', '/'
    awaiting_operand: bool = False  # 다음 숫자가 새 피연산자를 시작하는지
    has_error: bool = False  # 오류 래치


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    # 0 나누기는 계산기 오류로 처리
    if b == 0:
        raise DivisionByZero('division by zero')
    return a / b


OPERATIONS = {
    '+': add,
    '-': subtract,
    '*': multiply,
    '/': divide,
}


def evaluate(a: float, b: float, op: str) -> float:
    operation = OPERATIONS.get(op)
    if operation is None:
        return b
    return operation(a, b)


def format_result(value: float) -> str:
    """12자리 유효숫자로 반올림한 뒤 그 값을 재현하는 가장 짧은 10진 문자열"""
    rounded = float('{:.{}g}'.format(value, SIGNIFICANT_DIGITS))
    if not math.isfinite(rounded) or rounded == 0:
        # -0 도 '0'으로 표시
        return DEFAULT_DISPLAY

    # repr()은 float을 재현하는 최단 자릿수를 돌려준다
    exact = Decimal(repr(rounded))
    exponent = exact.adjusted()
    if -7 < exponent < 21:
        return _strip_zeros(format(exact, 'f'))

    mantissa = _strip_zeros(format(exact.scaleb(-exponent), 'f'))
    return '{}e{:+d}'.format(mantissa, exponent)


def _strip_zeros(s: str) -> str:
    if '.' in s:
        s = s.rstrip('0').rstrip('.')
    return s


class Calculator:
    """연산 엔진: 상태와 사칙연산/부호/퍼센트/= 처리"""

    def __init__(self, on_change: Optional[Callable[[CalculatorState], None]] = None) -> None:
        self.state = CalculatorState()
        # apply() 한 번마다 정확히 한 번 호출되는 렌더 콜백
        self.on_change = on_change

    # 단일 진입점
    def apply(self, action: Action) -> None:
        kind = getattr(action, 'kind', None)
        value = getattr(action, 'value', None)
        logger.debug('apply %s %r', kind, value)

        if kind is ActionKind.DIGIT:
            if isinstance(value, str) and len(value) == 1 and value in DIGITS:
                self.input_digit(value)
            else:
                logger.debug('ignored digit %r', value)
        elif kind is ActionKind.DECIMAL:
            self.input_dot()
        elif kind is ActionKind.OPERATOR:
            if value in OPERATORS:
                self.set_operator(value)
            else:
                logger.debug('ignored operator %r', value)
        elif kind is ActionKind.EQUALS:
            self.equal()
        elif kind is ActionKind.CLEAR:
            self.reset()
        elif kind is ActionKind.TOGGLE_SIGN:
            self.negative_positive()
        elif kind is ActionKind.PERCENT:
            self.percent()
        else:
            logger.debug('ignored action %r', action)

        if self.on_change is not None:
            self.on_change(self.state)

    def reset(self) -> None:
        self.state.display = DEFAULT_DISPLAY
        self.state.accumulator = None
        self.state.pending_operator = None
        self.state.awaiting_operand = False
        self.state.has_error = False

    def input_digit(self, d: str) -> None:
        s = self.state
        if s.has_error:
            # 새 입력이 오류를 암묵적으로 해제
            self.reset()

        if s.awaiting_operand:
            s.display = d
            s.awaiting_operand = False
            return

        if s.display == DEFAULT_DISPLAY:
            s.display = d
            return

        # '1e+21' 뒤나 아주 긴 숫자열처럼 무한대가 되는 입력은 무시
        candidate = s.display + d
        if not math.isfinite(float(candidate)):
            logger.debug('ignored digit %r, display would overflow', d)
            return
        s.display = candidate

    def input_dot(self) -> None:
        s = self.state
        if s.has_error:
            self.reset()

        if s.awaiting_operand:
            s.display = '0.'
            s.awaiting_operand = False
            return

        # 지수 표기('1e-7')에는 소수점을 붙이지 않는다
        if '.' not in s.display and 'e' not in s.display:
            s.display += '.'

    def set_operator(self, op: str) -> None:
        s = self.state
        if s.has_error:
            return

        input_value = float(s.display)

        if s.pending_operator and s.awaiting_operand:
            # 연산자 연속 입력: 평가 없이 교체
            s.pending_operator = op
            return

        if s.accumulator is None:
            s.accumulator = input_value
        elif s.pending_operator:
            try:
                result = evaluate(s.accumulator, input_value, s.pending_operator)
            except DivisionByZero:
                self._set_error()
                return
            s.accumulator = result
            s.display = format_result(result)
        else:
            s.accumulator = input_value

        s.pending_operator = op
        s.awaiting_operand = True

    def equal(self) -> None:
        s = self.state
        if s.has_error or not s.pending_operator or s.awaiting_operand:
            return

        input_value = float(s.display)
        try:
            result = evaluate(s.accumulator, input_value, s.pending_operator)
        except DivisionByZero:
            self._set_error()
            return

        s.display = format_result(result)
        s.accumulator = None
        s.pending_operator = None
        s.awaiting_operand = False

    def negative_positive(self) -> None:
        s = self.state
        if s.has_error or s.display == DEFAULT_DISPLAY:
            return
        s.display = format_result(float(s.display) * -1)

    def percent(self) -> None:
        s = self.state
        if s.has_error:
            return

        result = float(s.display) / 100
        s.display = format_result(result)
        if not s.pending_operator:
            # 단항 문맥: 새 기준 피연산자가 됨
            s.accumulator = result

    # 표시 문자열
    def display_text(self) -> str:
        return self.state.display

    # 내부 유틸
    def _set_error(self) -> None:
        logger.info('division by zero, calculator latched')
        s = self.state
        s.display = ERROR_DISPLAY
        s.accumulator = None
        s.pending_operator = None
        s.awaiting_operand = False
        s.has_error = True
