"""CSV type providers, RPN and expression evaluation, object rendering and expression format strings."""

__version__ = "0.1.0"
__all__ = [
    "csv_provider",
    "eformat",
    "expr",
    "exprfuncs",
    "rpn",
    "stream",
]