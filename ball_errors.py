"""Errores del motor de bolas complejas.

Todos heredan de ValueError para que quien llame pueda tratar cualquier
fallo de entrada o de dominio de la misma forma.
"""


class BallError(ValueError):
    """Error base de la aritmética de bolas."""


class ParseError(BallError):
    """Literal numérico mal formado en una componente de un operando."""

    def __init__(self, component: str, text: str, reason: str = "literal inválido"):
        self.component = component
        self.text = text
        self.reason = reason
        super().__init__(f"{reason} en la parte {component}: {text!r}")


class UnsupportedOperationError(BallError):
    """Nombre de operación no reconocido."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operación no soportada: {operation}")


class DomainError(BallError):
    """Resultado indefinido o no acotado sobre la bola de entrada."""


class ConversionError(BallError):
    """La bola no se puede representar como decimal finito o como entero."""
