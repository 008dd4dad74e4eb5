from typing import Any

from pydantic import BaseModel

# Type tags produced by schema inference. Values outside this set are possible
# for exotic primitives, which fall back to their Python type name.
TYPE_NULL = "null"
TYPE_ARRAY = "array"
TYPE_DATE = "date"
TYPE_OBJECT_ID = "objectId"
TYPE_OBJECT = "object"
TYPE_EMAIL = "email"
TYPE_PHONE = "phone"
TYPE_URL = "url"
TYPE_STRING = "string"
TYPE_NUMBER = "number"
TYPE_BOOLEAN = "boolean"


class FieldSchema(BaseModel):
    """Inferred descriptor for one field across a collection sample.

    Attributes:
        type: Type tag inferred from the recorded sample value.
        sample_value: The value the type was inferred from.
        occurrence_count: Number of sampled documents containing the field.
    """

    type: str
    sample_value: Any = None
    occurrence_count: int = 1

    model_config = {"frozen": False}
