class SchemaError(Exception):
    """Failure that aborts a whole schema computation."""

    kind = "SchemaError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class LoadError(SchemaError):
    kind = "LoadError"


class ManifestError(SchemaError):
    kind = "ManifestError"


class ModuleNotFound(SchemaError):
    kind = "ModuleNotFound"
