class LedgerError(Exception):
    """Base class for failures talking to the ledger."""

    def __init__(self, method: str, cause=None):
        self.method = method
        self.cause = cause
        msg = f"{method} failed"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class LedgerReadError(LedgerError):
    pass


class LedgerWriteError(LedgerError):
    pass


class SubscriptionError(LedgerError):
    """Event stream transport failure. `from_block` is where the stream can resume."""

    def __init__(self, method: str, cause=None, from_block: int = 0):
        super().__init__(method, cause)
        self.from_block = from_block


class RegistrationError(Exception):
    def __init__(self, address: str, reason):
        self.address = address
        self.reason = reason
        super().__init__(f"oracle {address} failed to register: {reason}")


class ConfigError(Exception):
    pass
