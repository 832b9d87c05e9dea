"""Errors raised while turning PDF text runs into records."""


class ParseError(ValueError):
    """Base class for record reconstruction failures."""


class InvalidIdentifier(ParseError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Unrecognized precinct identifier: {identifier!r}")


class InvalidGroup(ParseError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No district digit in precinct identifier: {identifier!r}")


class WrongFieldCount(ParseError):
    def __init__(self, fields: list, expected: int):
        self.fields = list(fields)
        self.expected = expected
        super().__init__(
            f"Incorrect record length {len(self.fields)} (expected {expected}) for {', '.join(self.fields)}"
        )


class DuplicateRecord(ParseError):
    def __init__(self, precinct: str, method: str):
        self.precinct = precinct
        self.method = method
        super().__init__(f"Precinct {precinct} has more than one '{method}' row")
