from peoplenrich.domain.enums.attribute_kind import AttributeKind
__all__ = [
    "AttributeKind",
]
