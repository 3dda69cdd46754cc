class WizardError(Exception):
    pass


class UnknownFieldError(WizardError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown event form field: {field}")
        self.field = field


class DraftLoadCorruption(WizardError):
    pass


class SubmitFailure(WizardError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmitInProgressError(WizardError):
    pass
