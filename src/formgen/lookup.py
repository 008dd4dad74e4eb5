from typing import List, Optional, Sequence

from schema import DetectedRelationship, FieldConfig, LookupConfig

LOOKUP_FIELD_TYPE = "lookup"


def confirmed_relationships(
    relationships: Sequence[DetectedRelationship],
) -> List[DetectedRelationship]:
    """Relationships the user kept checked."""
    return [r for r in relationships if r.confirmed]


def _match_relationship(
    field: FieldConfig, relationships: Sequence[DetectedRelationship]
) -> Optional[DetectedRelationship]:
    last_segment = field.path.rsplit(".", 1)[-1]
    for relationship in relationships:
        if relationship.field_name in (field.path, last_segment):
            return relationship
    return None


def apply_confirmed_relationships(
    fields: Sequence[FieldConfig], relationships: Sequence[DetectedRelationship]
) -> List[FieldConfig]:
    """Force fields backed by a confirmed relationship to lookup type.

    A field matches when its path, or the last segment of a dotted path,
    equals the relationship's field name. The generated type and lookup
    settings of a matching field are overridden.
    """
    confirmed = confirmed_relationships(relationships)
    if not confirmed:
        return list(fields)

    result: List[FieldConfig] = []
    for field in fields:
        relationship = _match_relationship(field, confirmed)
        if relationship is None:
            result.append(field)
            continue
        result.append(
            field.model_copy(
                update={
                    "type": LOOKUP_FIELD_TYPE,
                    "lookup": LookupConfig(
                        collection=relationship.target_collection,
                        display_field=relationship.display_field,
                        value_field="_id",
                        searchable=True,
                        preload_options=True,
                    ),
                }
            )
        )
    return result
