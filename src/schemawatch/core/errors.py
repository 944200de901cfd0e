class SchemawatchError(Exception):
    """Base class for errors raised by schemawatch."""


class ParseError(SchemawatchError):
    """Instance text is not well-formed JSON."""

    def __init__(self, message: str, line: int = 1) -> None:
        super().__init__(f"{message} (line {line})")
        self.message = message
        self.line = line


class SchemaLoadError(SchemawatchError):
    """A schema could not be read, parsed, or compiled."""

    def __init__(self, schema: str, message: str) -> None:
        super().__init__(f"Cannot load schema {schema}: {message}")
        self.schema = schema
        self.message = message
