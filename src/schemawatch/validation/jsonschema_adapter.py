from __future__ import annotations

from collections import defaultdict
from typing import Any

from jsonschema import SchemaError, ValidationError
from jsonschema.validators import validator_for

from schemawatch.core.errors import SchemaLoadError
from schemawatch.core.positions import make_pointer
from schemawatch.models import Failure

_COMBINATORS = frozenset({"anyOf", "oneOf"})


def _alternatives(error: ValidationError) -> list[list[str]]:
    if error.validator not in _COMBINATORS or not error.context:
        return []
    by_branch: dict[int, list[str]] = defaultdict(list)
    for sub_error in error.context:
        branch = sub_error.relative_schema_path[0] if sub_error.relative_schema_path else 0
        by_branch[int(branch)].append(sub_error.message)
    return [by_branch[branch] for branch in sorted(by_branch)]


def to_failure(error: ValidationError) -> Failure:
    return Failure(
        pointer=make_pointer(list(error.absolute_path)),
        message=error.message,
        alternatives=_alternatives(error),
    )


class JsonSchemaValidator:
    """Validate instances with the ``jsonschema`` library.

    Implements the ``SchemaValidator`` protocol. The draft is picked from the
    schema's ``$schema`` keyword, defaulting to the latest one.
    """

    def validate(self, schema: Any, instance: Any) -> list[Failure]:
        if not isinstance(schema, (dict, bool)):
            raise SchemaLoadError("(inline)", f"expected an object or boolean, got {type(schema).__name__}")
        cls = validator_for(schema)
        try:
            cls.check_schema(schema)
        except SchemaError as exc:
            raise SchemaLoadError("(inline)", exc.message) from exc
        validator = cls(schema)
        return [to_failure(error) for error in validator.iter_errors(instance)]
