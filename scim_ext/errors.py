"""Exceptions raised while decoding, encoding, and manipulating SCIM resources."""


class SCIMError(Exception):
    """Base error with a message and the location it refers to."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        loc = f" at {self.path}" if self.path else ""
        return f"{self.message}{loc}"


class TypeMismatch(SCIMError):
    """A declared field received a JSON value of the wrong kind."""

    def __init__(self, field: str, expected: str, actual: str):
        super().__init__(f"Expected {expected} but got {actual}", path=field)
        self.field = field
        self.expected = expected
        self.actual = actual

    def __repr__(self):
        return f"TypeMismatch(field={self.field!r}, expected={self.expected!r}, actual={self.actual!r})"


class MalformedDocument(SCIMError):
    """The input is not a JSON object (or a raw bag value is not valid JSON)."""


class FieldNameCollision(SCIMError):
    """An additional property uses the name of a declared field."""

    def __init__(self, name: str):
        super().__init__(f"Additional property '{name}' collides with a declared field", path=name)
        self.name = name


class ExtensionNotFound(SCIMError):
    def __init__(self, namespace: str):
        super().__init__(f"Extension '{namespace}' is not present", path=namespace)
        self.namespace = namespace


class ExtensionAlreadyExists(SCIMError):
    def __init__(self, namespace: str):
        super().__init__(f"Extension '{namespace}' already exists", path=namespace)
        self.namespace = namespace
