# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz


class TempMailError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(TempMailError):
    status_code = 400
    default_message = "Missing token parameter"


class Unauthorized(TempMailError):
    status_code = 401
    default_message = "Provider rejected the session credential"


class NotFound(TempMailError):
    status_code = 404
    default_message = "Not found"


class CapacityExceeded(TempMailError):
    status_code = 503
    default_message = "Server at capacity, please try again later"


class Overloaded(TempMailError):
    status_code = 503
    default_message = "Server is under high memory load, please try again later"


class UpstreamFailure(TempMailError):
    status_code = 500
    default_message = "Failed to generate temporary email"


class ProviderError(Exception):
    """Raised inside adapters; converted to a failed ``ProviderResult``."""

    UNAVAILABLE = 'unavailable'
    NOT_FOUND = 'not_found'
    UNAUTHORIZED = 'unauthorized'
    UNSUPPORTED = 'unsupported'

    def __init__(self, kind, detail=''):
        super().__init__(f"{kind}: {detail}" if detail else kind)
        self.kind = kind
        self.detail = detail
