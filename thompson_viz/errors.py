class RegexSyntaxError(Exception):
    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)


class LexicalError(RegexSyntaxError):
    pass


class GraphInvariantError(Exception):
    pass


class ExportError(Exception):
    pass
