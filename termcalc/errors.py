"""Exceptions raised by the expression engine."""


class CalcError(ValueError):
    """Base class for every error the engine reports to its caller."""


class LexError(CalcError):
    def __init__(self, message, text):
        super().__init__(message)
        self.text = text


class EvalError(CalcError):
    pass


class UnexpectedEndError(EvalError):
    def __init__(self):
        super().__init__("Unexpected end of expression")


class MissingParenthesisError(EvalError):
    def __init__(self, position):
        super().__init__("Missing closing parenthesis")
        self.position = position


class UnexpectedIdentifierError(EvalError):
    def __init__(self, name):
        super().__init__(f"Unexpected identifier: {name}")
        self.name = name


class UnknownFunctionError(EvalError):
    def __init__(self, name):
        super().__init__(f"Unknown function: {name}")
        self.name = name


class UnexpectedTokenError(EvalError):
    def __init__(self, token):
        super().__init__(f"Unexpected token: {token}")
        self.token = token


class DivisionByZeroError(EvalError):
    def __init__(self):
        super().__init__("Division by zero")


class NestingTooDeepError(EvalError):
    def __init__(self):
        super().__init__("Expression nested too deeply")
