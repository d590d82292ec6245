class GameError(ValueError):
    """Base class for recoverable game errors.

    These never end the process or close a connection; the gateway logs them
    and drops the offending message.
    """


class SessionNotFound(GameError):
    def __init__(self, code: str):
        super().__init__(f"Game {code} not found")
        self.code = code


class SessionFull(GameError):
    def __init__(self, code: str):
        super().__init__(f"Game {code} is full")
        self.code = code


class InvalidState(GameError):
    pass


class MalformedMessage(GameError):
    pass
