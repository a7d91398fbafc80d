"""
Key mapping and request-shaping helpers for the shared physical table.

Every logical table stores its records in one physical table. A record's
partition key is synthesized from the logical table name and the record's
logical ``id``::

    format_key({'id': '42'}, 'users')  # -> {'PartitionKey': 'users|42'}

Keys and records that carry no logical id are assumed to already have a
physical key shape and pass through untouched.
"""

from decimal import Decimal
from typing import Any, Dict, Tuple, Union

from ..exceptions import ValidationError

DEFAULT_PRIMARY_KEY = 'PartitionKey'
DEFAULT_KEY_SEPARATOR = '|'
LOGICAL_ID_FIELD = 'id'

KeyLike = Union[str, int, Decimal, Dict[str, Any]]

# Scalars are wrapped as a logical id; these are not
UNUSABLE_KEY_TYPES = (bool, bytes, list, tuple, set, frozenset)


def physical_key_value(table_name: str, logical_id: Any, separator: str = DEFAULT_KEY_SEPARATOR) -> str:
    """Build the partition key string ``<table_name><separator><logical_id>``."""
    return f"{table_name}{separator}{logical_id}"


def format_key(
    key: KeyLike,
    table_name: str,
    primary_key: str = DEFAULT_PRIMARY_KEY,
    separator: str = DEFAULT_KEY_SEPARATOR
) -> Dict[str, Any]:
    """Map a logical key onto the physical key of the shared table.

    Args:
        key: Logical id (string, number...), ``{'id': ...}`` mapping, or a
            physical key mapping
        table_name: Logical table name used as the partition key prefix
        primary_key: Hash key attribute of the physical table
        separator: Separator between table name and id

    Returns:
        ``{primary_key: '<table_name>|<id>'}`` when a logical id is present,
        otherwise the key unchanged

    Raises:
        ValidationError: If the key is None, a boolean or a sequence/set
    """
    if key is None or isinstance(key, UNUSABLE_KEY_TYPES):
        raise ValidationError(
            f"Key must be a logical id or a key mapping, got {type(key).__name__}",
            {'key': repr(key)}
        )
    if not isinstance(key, dict):
        key = {LOGICAL_ID_FIELD: key}

    logical_id = key.get(LOGICAL_ID_FIELD)
    if logical_id:
        return {primary_key: physical_key_value(table_name, logical_id, separator)}
    return key


def format_item(
    item: Dict[str, Any],
    table_name: str,
    primary_key: str = DEFAULT_PRIMARY_KEY,
    separator: str = DEFAULT_KEY_SEPARATOR
) -> Dict[str, Any]:
    """Add the physical partition key to a record that has a logical id.

    The synthesized key goes in first and the record's own attributes are laid
    over it, so a record that already names its primary key keeps that value.
    The input mapping is never mutated.

    Raises:
        ValidationError: If the record is not a mapping
    """
    if not isinstance(item, dict):
        raise ValidationError(
            f"Record must be a mapping, got {type(item).__name__}",
            {'item': repr(item)}
        )
    logical_id = item.get(LOGICAL_ID_FIELD)
    if logical_id:
        return {
            primary_key: physical_key_value(table_name, logical_id, separator),
            **item,
        }
    return item


def to_dynamodb_value(value: Any) -> Any:
    """Convert a Python value into something the boto3 serializer accepts.

    boto3 refuses ``float``; floats are converted to ``Decimal`` through their
    string form so ``0.1`` stays ``Decimal('0.1')``. Lists, tuples, sets and
    mappings are converted recursively (a set of floats becomes a number set),
    everything else is returned as is.
    """
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamodb_value(v) for v in value]
    if isinstance(value, tuple):
        return [to_dynamodb_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {to_dynamodb_value(v) for v in value}
    return value


def build_update_expression(updates: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Build a SET UpdateExpression that overwrites every given attribute.

    Positional placeholders keep reserved words (``name``, ``status``...) and
    attribute names with dots or dashes safe.

    Example:
        >>> build_update_expression({'name': 'x', 'status': 'ok'})
        ('SET #f0 = :v0, #f1 = :v1', {'#f0': 'name', '#f1': 'status'}, {':v0': 'x', ':v1': 'ok'})

    Raises:
        ValidationError: If there is nothing to update
    """
    if not updates:
        raise ValidationError("Update requires at least one attribute")

    update_parts = []
    expression_names = {}
    expression_values = {}

    for i, (attribute, value) in enumerate(updates.items()):
        name_placeholder = f"#f{i}"
        value_placeholder = f":v{i}"
        update_parts.append(f"{name_placeholder} = {value_placeholder}")
        expression_names[name_placeholder] = attribute
        expression_values[value_placeholder] = to_dynamodb_value(value)

    update_expression = "SET " + ", ".join(update_parts)
    return update_expression, expression_names, expression_values
