"""Error taxonomy for decayrec.

Library code raises these; only the CLI turns them into exit codes.
"""


class DecayrecError(Exception):
    """Base class for every decayrec failure."""
    pass


class MalformedRecordError(DecayrecError):
    """A row in an input file has too few fields or an unparseable value."""

    def __init__(self, source: str, line_no: int, reason: str):
        self.source = source
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"{source}:{line_no}: {reason}")


class UnknownProductError(DecayrecError):
    """An event references a product missing from the product score index."""

    def __init__(self, product_id: str, source: str = None, line_no: int = None):
        self.product_id = product_id
        self.source = source
        self.line_no = line_no
        where = f"{source}:{line_no}: " if source and line_no else ""
        super().__init__(f"{where}unknown product '{product_id}'")


class UnknownUserError(DecayrecError):
    """No ranking exists for the requested user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No recommendations for user '{user_id}'")


class StoreUnavailableError(DecayrecError):
    """The ranking snapshot is missing, corrupt, or written by another schema."""

    MISSING = "missing"
    CORRUPT = "corrupt"
    INCOMPATIBLE = "incompatible"

    def __init__(self, path, reason: str, detail: str = ""):
        self.path = str(path)
        self.reason = reason
        self.detail = detail
        msg = f"Ranking snapshot {self.path} is {reason}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
