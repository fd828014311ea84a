PREFIX = "RateController"


class ControllerError(Exception):
    """Base class. Any ControllerError aborts the call with no state change."""
    reason = "error"

    def __init__(self, detail=None):
        self.detail = detail
        message = f"{PREFIX}/{self.reason}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotAuthority(ControllerError):
    reason = "account-not-authorized"


class NotReader(ControllerError):
    reason = "account-not-reader"


class NotAuthorizedProposer(ControllerError):
    reason = "invalid-msg-sender"


class CooldownNotElapsed(ControllerError):
    reason = "wait-more"


class InvalidGain(ControllerError):
    reason = "invalid-gain"


class InvalidNoiseBarrier(ControllerError):
    reason = "invalid-nb"


class InvalidPeriodSize(ControllerError):
    reason = "invalid-ips"


class InvalidOutputBound(ControllerError):
    reason = "invalid-output-bound"


class InvalidLeak(ControllerError):
    reason = "invalid-pscl"


class CannotOverrideIntegral(ControllerError):
    reason = "cannot-set-pdc"


class UnrecognizedParameter(ControllerError):
    reason = "modify-unrecognized-param"


class InvalidImportedState(ControllerError):
    reason = "invalid-imported-state"


class InvalidIdentity(ControllerError):
    reason = "invalid-address"


class ArithmeticOverflow(ControllerError, ArithmeticError):
    reason = "arithmetic-overflow"
