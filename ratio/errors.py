# ratio/errors.py


class InvalidInputError(ValueError):
    """输入结构不合法（顶层形状错误、字段缺失等）"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        self.message = message
        super().__init__(message if field is None else f"{field}: {message}")


class UnknownGridTypeError(KeyError):
    """未知的对阵网格类型"""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown grid type {name!r} (available: {', '.join(available)})")

    def __str__(self) -> str:
        return self.args[0]
