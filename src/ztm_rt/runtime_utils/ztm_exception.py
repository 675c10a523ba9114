class ZtmRtException(Exception):
    """
    Generic exception for the ztm_rt library
    """


class ZtmFatalError(ZtmRtException):
    """
    Error that can not be recovered from locally. Aborts the whole run.
    """


class ResourceFetchError(ZtmFatalError):
    """
    Unable to retrieve one of the remote resources
    """

    def __init__(self, resource: str):
        message = f"Unable to fetch resource {resource}"
        super().__init__(message)
        self.resource = resource


class DictionaryLoadError(ZtmFatalError):
    """
    Vehicle dictionary could not be parsed into a table
    """


class FeedDecodeError(ZtmRtException):
    """
    GTFS-RT payload could not be decoded into a FeedMessage. Recoverable, only
    the feed it belongs to is affected.
    """


class FeedTypeFromFilenameException(ZtmRtException):
    """
    Unable to derive feed type from a resource file name
    """

    def __init__(self, filename: str):
        message = f"Unable to deduce Feed Type from {filename}"
        super().__init__(message)
        self.filename = filename


class NoImplException(ZtmRtException):
    """
    General Error for feed types that have no flattener
    """
