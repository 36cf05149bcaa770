# calculator_window.py
# Python 3.x, PyQt5
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont, QKeyEvent
from PyQt5.QtWidgets import (
    QApplication,
    QWidget,
    QGridLayout,
    QVBoxLayout,
    QPushButton,
    QLineEdit,
)

import calculator
from calculator import Action, Calculator, CalculatorState

logger = logging.getLogger('calc_desk.calculator_window')


@dataclass(frozen=True)
class ButtonSpec:
    id: str
    label: str
    action: str
    value: Optional[str] = None
    column_span: int = 1


# 버튼 선언: UI와 동작을 한 곳에서 맞춘다
BUTTON_LAYOUT = [
    [
        ButtonSpec('btn-ac', 'AC', 'clear'),
        ButtonSpec('btn-sign', '+/-', 'toggleSign'),
        ButtonSpec('btn-percent', '%', 'percent'),
        ButtonSpec('btn-divide', '÷', 'operator', '/'),
    ],
    [
        ButtonSpec('btn-7', '7', 'digit', '7'),
        ButtonSpec('btn-8', '8', 'digit', '8'),
        ButtonSpec('btn-9', '9', 'digit', '9'),
        ButtonSpec('btn-multiply', '×', 'operator', '*'),
    ],
    [
        ButtonSpec('btn-4', '4', 'digit', '4'),
        ButtonSpec('btn-5', '5', 'digit', '5'),
        ButtonSpec('btn-6', '6', 'digit', '6'),
        ButtonSpec('btn-subtract', '−', 'operator', '-'),
    ],
    [
        ButtonSpec('btn-1', '1', 'digit', '1'),
        ButtonSpec('btn-2', '2', 'digit', '2'),
        ButtonSpec('btn-3', '3', 'digit', '3'),
        ButtonSpec('btn-add', '+', 'operator', '+'),
    ],
    [
        ButtonSpec('btn-0', '0', 'digit', '0', column_span=2),
        ButtonSpec('btn-decimal', '.', 'decimal'),
        ButtonSpec('btn-equals', '=', 'equals'),
    ],
]

BUTTONS_BY_ID: Dict[str, ButtonSpec] = {
    button.id: button for row in BUTTON_LAYOUT for button in row
}

# 레이아웃의 action 이름 → Action 생성자
ACTION_FACTORIES: Dict[str, Callable[[Optional[str]], Action]] = {
    'digit': lambda value: calculator.digit(value),
    'decimal': lambda value: calculator.DECIMAL,
    'operator': lambda value: calculator.operator(value),
    'equals': lambda value: calculator.EQUALS,
    'clear': lambda value: calculator.CLEAR,
    'toggleSign': lambda value: calculator.TOGGLE_SIGN,
    'percent': lambda value: calculator.PERCENT,
}

# 키보드 입력 → 버튼 id
KEY_BUTTONS = {
    '+': 'btn-add',
    '-': 'btn-subtract',
    '*': 'btn-multiply',
    '/': 'btn-divide',
    '.': 'btn-decimal',
    '=': 'btn-equals',
    '%': 'btn-percent',
}
KEY_BUTTONS.update({d: 'btn-' + d for d in '0123456789'})

STYLE_SHEET = '''
QPushButton[role="operator"] { background: #f4f6f9; color: #0176d3; }
QPushButton[role="operator"][active="true"] { background: #0176d3; color: white; }
QPushButton[role="equals"] { background: #0176d3; color: white; }
QPushButton[role="utility"] { background: #3e3e3c; color: white; }
'''


def action_for(button: ButtonSpec) -> Optional[Action]:
    factory = ACTION_FACTORIES.get(button.action)
    if factory is None:
        return None
    return factory(button.value)


def button_role(button: ButtonSpec) -> str:
    if button.action == 'operator':
        return 'operator'
    if button.action == 'equals':
        return 'equals'
    if button.action in ('clear', 'toggleSign', 'percent'):
        return 'utility'
    return 'digit'


def is_active(button: ButtonSpec, state: CalculatorState) -> bool:
    # 피연산자를 기다리는 동안 대기 연산자 버튼을 강조
    return (
        button.action == 'operator'
        and state.awaiting_operand
        and state.pending_operator == button.value
    )


class CalculatorWindow(QWidget):
    """PyQt5 UI: 버튼 → Calculator 엔진 연결"""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.engine = Calculator(on_change=self.render)
        self.buttons: Dict[str, QPushButton] = {}
        self._build_ui()
        self.render(self.engine.state)

    def _build_ui(self) -> None:
        self.setWindowTitle('Calculator')
        self.setStyleSheet(STYLE_SHEET)
        root = QVBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)
        self.setLayout(root)

        self.display = QLineEdit()
        self.display.setReadOnly(True)
        self.display.setAlignment(Qt.AlignRight)
        self.display.setFocusPolicy(Qt.NoFocus)
        font = QFont(self.display.font())
        font.setPointSize(28)
        self.display.setFont(font)
        root.addWidget(self.display)

        grid = QGridLayout()
        grid.setSpacing(6)
        root.addLayout(grid)

        for r, row in enumerate(BUTTON_LAYOUT):
            c = 0
            for button in row:
                btn = QPushButton(button.label)
                btn.setObjectName(button.id)
                btn.setProperty('role', button_role(button))
                btn.setMinimumHeight(56)
                btn.setCursor(Qt.PointingHandCursor)
                btn.setFocusPolicy(Qt.NoFocus)
                # clicked는 checked(bool) 인자를 내보내므로 첫 인자를 흡수하도록 작성
                btn.clicked.connect(lambda checked=False, bid=button.id: self.on_button(bid))
                grid.addWidget(btn, r, c, 1, button.column_span)
                self.buttons[button.id] = btn
                c += button.column_span

        self.setFocusPolicy(Qt.StrongFocus)
        self.resize(360, 520)

    def on_button(self, button_id: str) -> None:
        button = BUTTONS_BY_ID.get(button_id)
        action = action_for(button) if button is not None else None
        if action is None:
            logger.debug('no action for button %r', button_id)
            return
        self.engine.apply(action)

    def render(self, state: CalculatorState) -> None:
        self.display.setText(state.display)
        for button_id, btn in self.buttons.items():
            button = BUTTONS_BY_ID[button_id]
            if button_role(button) != 'operator':
                continue
            active = is_active(button, state)
            if btn.property('active') == active:
                continue
            btn.setProperty('active', active)
            # 동적 속성 변경 후 스타일 재적용
            btn.style().unpolish(btn)
            btn.style().polish(btn)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key in (Qt.Key_Return, Qt.Key_Enter):
            self.on_button('btn-equals')
        elif key == Qt.Key_Escape:
            self.on_button('btn-ac')
        elif event.text() in KEY_BUTTONS:
            self.on_button(KEY_BUTTONS[event.text()])
        else:
            super().keyPressEvent(event)


def main() -> None:
    app = QApplication(sys.argv)
    w = CalculatorWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
