"""Exceptions raised for scalar-kind and vector type violations."""


class VectorTypeError(TypeError):
    """An operand has the wrong kind for the requested vector operation."""


class PromotionError(VectorTypeError):
    """No result kind is known for a combination of scalar kinds."""
