"""
Project field type helpers.
Maps field data types to GraphQL scalars and builds mutation values.
"""

import math
from typing import Union
from pydantic import BaseModel, ConfigDict
from update_project.github.models import ProjectField

SINGLE_SELECT = "single_select"

# Field types whose mutation value is not a plain String
GRAPHQL_TYPES = {
    "date": "Date",
    "number": "Float",
}


class InvalidFieldValueError(ValueError):
    """Value cannot be converted to the field's type."""

    pass


class FieldValueInput(BaseModel):
    """A value for updateProjectV2ItemFieldValue.

    input_key and graphql_type are always derived together from the field
    type, so the payload key and the declared variable type cannot disagree.
    """

    model_config = ConfigDict(frozen=True)

    input_key: str
    graphql_type: str
    value: Union[float, str]


def value_graphql_type(field_type: str) -> str:
    """
    Convert a field type to the GraphQL scalar used for the mutation value.

    Args:
        field_type: Lower-cased field data type

    Returns:
        "Date", "Float" or "String"
    """
    return GRAPHQL_TYPES.get(field_type, "String")


def convert_value_to_field_type(value: str, field_type: str) -> Union[float, str]:
    """
    Convert a string input to the type the field expects.

    Args:
        value: Raw string value from the action input
        field_type: Lower-cased field data type

    Returns:
        float for number fields, the unchanged string otherwise

    Raises:
        InvalidFieldValueError: If a number field gets a non-numeric value
    """
    if field_type == "number":
        try:
            number = float(value)
        except ValueError as e:
            raise InvalidFieldValueError(f"Invalid number value: {value}") from e

        if not math.isfinite(number):
            raise InvalidFieldValueError(f"Invalid number value: {value}")
        return number

    return value


def build_field_value_input(field: ProjectField, value: str) -> FieldValueInput:
    """
    Build the mutation value for a resolved field.

    Single select fields send the resolved option id and ignore the raw
    value. Every other type sends the converted value under a key named
    after the field type (text, number, date).

    Args:
        field: Resolved project field
        value: Raw string value from the action input

    Returns:
        FieldValueInput for the mutation
    """
    if field.field_type == SINGLE_SELECT:
        return FieldValueInput(
            input_key="singleSelectOptionId",
            graphql_type=value_graphql_type(field.field_type),
            value=field.option_id,
        )

    return FieldValueInput(
        input_key=field.field_type,
        graphql_type=value_graphql_type(field.field_type),
        value=convert_value_to_field_type(value, field.field_type),
    )
