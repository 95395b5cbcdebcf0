from typing import ClassVar, Tuple

from pydantic import BaseModel, model_validator


class PartialUpdateDTO(BaseModel):
    """
    Base for PATCH payloads: only fields explicitly sent are applied.

    Fields listed in ``non_nullable`` map to NOT NULL columns; they may be
    omitted but not sent as null.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self
