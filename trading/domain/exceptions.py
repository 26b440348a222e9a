class LedgerError(Exception):
    """Base class for every business rule violation raised by the ledger."""


class NotAuthenticated(LedgerError):
    """Raised when an operation requires a logged-in participant and there is none."""

    def __init__(self):
        super().__init__("Only logged-in participants can perform this operation.")


class ParticipantAlreadyExists(LedgerError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username):
        self.username = username
        super().__init__("Participant already exists.")


class CounterpartyNotFound(LedgerError):
    """Raised when a trade names a counterparty username that is not registered."""

    def __init__(self, username):
        self.username = username
        super().__init__("Seller does not exist.")


class InsufficientEnergy(LedgerError):
    """Raised when the paying side of a trade cannot cover the requested amount."""

    def __init__(self, participant_id, requested, available, operation):
        self.participant_id = participant_id
        self.requested = requested
        self.available = available
        self.operation = operation
        verb = "buying" if operation == "buy" else "selling"
        super().__init__(f"Insufficient energy balance for {verb}.")


class InvalidOperation(LedgerError):
    """Raised when a trade operation is neither ``buy`` nor ``sell``."""

    def __init__(self, operation):
        self.operation = operation
        super().__init__("Invalid operation type.")


class InvalidAmount(LedgerError):
    """Raised when a trade amount is not a positive finite number, or would overflow a balance."""

    def __init__(self, amount, message="Amount must be a positive number."):
        self.amount = amount
        super().__init__(message)


class InvalidBalance(LedgerError):
    """Raised when a starting energy balance is not a finite number."""

    def __init__(self, energy_balance):
        self.energy_balance = energy_balance
        super().__init__("Energy balance must be a finite number.")


class InvalidCredentials(LedgerError):
    """Raised on login for an unknown username or a wrong password alike."""

    def __init__(self):
        super().__init__("Participant does not exist or incorrect password.")


class NoActiveSession(LedgerError):
    """Raised when signing out without being logged in."""

    def __init__(self):
        super().__init__("There is no logged-in participant.")
