from typing import Any, Protocol

from schemawatch.models import Failure


class SchemaValidator(Protocol):
    def validate(self, schema: Any, instance: Any) -> list[Failure]: ...
