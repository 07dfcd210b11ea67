"""Errors raised while configuring instances of augmented types."""


class MissingRequiredPropertyError(Exception):
    """Raised when a required property has no value after configuration.

    A required property is satisfied either by a key in the configuration
    spec or by a non-None value already present on the instance (typically a
    default set in __init__ or on the class). Configuration is aborted before
    any field is assigned.

    Attributes:
        type_name: Display name of the type being configured
        property_name: The unresolved required property
    """

    def __init__(self, type_name: str, property_name: str) -> None:
        self.type_name = type_name
        self.property_name = property_name
        super().__init__(f"{type_name} requires property '{property_name}' to be defined!")
