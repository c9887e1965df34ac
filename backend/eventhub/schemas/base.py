"""
Shared pydantic configuration.

The public API speaks camelCase (``totalPrice``, ``isFeatured``); Python code
uses snake_case. Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(CamelModel):
    """
    Base for partial updates.

    Fields left out of the body keep their stored value. Sending ``null`` for a
    field is rejected: no entity field can be unset.
    """

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
