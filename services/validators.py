"""Валидаторы и нормализаторы входных данных форм."""

import ast
import operator as op
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """Ошибка проверки данных формы."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


def require_fields(data: Mapping, labels: Mapping[str, str]) -> None:
    """Проверить, что все поля из *labels* заполнены.

    Args:
        data: Собранные данные формы.
        labels: Имя поля → подпись для сообщения.

    Raises:
        ValidationError: Если хотя бы одно поле пустое.
    """
    missing = [
        name
        for name in labels
        if data.get(name) is None or (isinstance(data.get(name), str) and not data[name].strip())
    ]
    if missing:
        names = ", ".join(labels[name] for name in missing)
        raise ValidationError(f"Заполните обязательные поля: {names}", missing)


def validate_email(email: str | None) -> str | None:
    if not email:
        return None
    email = email.strip()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"Некорректный email: {email}", ["email"])
    return email


def normalize_number(value: str | int | float | None) -> str | None:
    """Нормализует строку с числом и поддерживает простые выражения.

    Удаляет пробелы и буквы, заменяет запятую на точку. Можно вводить
    простые выражения и проценты, например ``10*10`` или ``5+5``. Процент
    записывается как ``10%`` и интерпретируется как ``10/100``.
    """

    if value is None:
        return None

    text = str(value)
    text = re.sub(r"\s+", "", text)
    text = text.replace("\u00a0", "")
    text = text.replace(",", ".")
    text = re.sub(r"[a-zA-Zа-яА-Я$]+", "", text)
    text = text.rstrip(".")

    if text == "":
        return text

    expr = re.sub(r"(\d+(?:\.\d+)?)%", r"(\1/100)", text)

    try:
        node = ast.parse(expr, mode="eval").body

        allowed = {
            ast.Add: op.add,
            ast.Sub: op.sub,
            ast.Mult: op.mul,
            ast.Div: op.truediv,
        }

        def _eval(n):
            if isinstance(n, ast.Constant) and isinstance(n.value, (int, float)):
                return n.value
            if isinstance(n, ast.UnaryOp) and isinstance(n.op, ast.USub):
                return -_eval(n.operand)
            if isinstance(n, ast.BinOp) and type(n.op) in allowed:
                return allowed[type(n.op)](_eval(n.left), _eval(n.right))
            raise ValueError("Недопустимое выражение")

        result = _eval(node)
        if isinstance(result, float) and result.is_integer():
            result = int(result)
        return str(result)
    except (SyntaxError, ValueError, ZeroDivisionError):
        return text


def parse_decimal(value, label: str = "Сумма") -> Decimal | None:
    """Строка формы → ``Decimal`` или ``None`` для пустого значения."""
    text = normalize_number(value)
    if text is None or text == "":
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"{label}: некорректное число «{value}»") from None


def parse_int(value, label: str = "Количество") -> int | None:
    number = parse_decimal(value, label)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValidationError(f"{label}: ожидается целое число")
    return int(number)
