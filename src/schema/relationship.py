from typing import List

from pydantic import BaseModel, Field, model_validator


class DetectedRelationship(BaseModel):
    """A reference-like field resolved to another collection in the same database.

    Attributes:
        field_name: Field in the sampled collection, e.g. "bookId".
        field_type: Inferred type tag of that field.
        target_collection: Referenced collection name, as listed by the database.
        display_field: Target field shown to users in the lookup dropdown.
        display_field_options: Target fields eligible as display field.
        confirmed: Whether the relationship is folded into generation.
        sample_values: Up to three preview values of the display field.
    """

    field_name: str
    field_type: str
    target_collection: str
    display_field: str
    display_field_options: List[str] = Field(default_factory=list)
    confirmed: bool = True
    sample_values: List[str] = Field(default_factory=list)

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _display_field_is_an_option(self) -> "DetectedRelationship":
        if self.display_field_options and self.display_field not in self.display_field_options:
            raise ValueError(
                f"display_field '{self.display_field}' is not one of "
                f"{self.display_field_options}"
            )
        return self
