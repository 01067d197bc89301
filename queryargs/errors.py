class QueryArgsError(Exception):
    """Base class for queryargs errors."""


class InvalidConfiguration(QueryArgsError, ValueError):
    pass


# Decode path
class DecodeError(QueryArgsError):
    """Token could not be turned back into key/value pairs."""


class MalformedPayload(DecodeError):
    pass


class IntegrityCheckFailed(DecodeError):
    pass


class PaddingOrCipherError(DecodeError):
    pass
