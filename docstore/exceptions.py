"""Custom exception classes for the document store."""


class DocStoreException(Exception):
    """
    Base exception class for all document store errors.
    """
    pass


class InvalidInputError(DocStoreException):
    """
    Raised when a caller supplies an empty name, no file bytes, or similar.
    """
    pass


class UploadTooLargeError(InvalidInputError):
    """
    Raised when an upload stream exceeds the configured maximum size.
    """
    pass


class NotFoundError(DocStoreException):
    """
    Raised when a requested folder, file or blob does not exist.
    """
    pass


class FolderNotFoundError(NotFoundError):
    """
    Raised when a referenced folder id does not resolve.
    """
    pass


class FileRecordNotFoundError(NotFoundError):
    """
    Raised when a requested file record does not exist.
    """
    pass


class BlobNotFoundError(NotFoundError):
    """
    Raised when no blob is stored under the requested id.
    """
    pass


class ForbiddenError(DocStoreException):
    """
    Raised when an actor attempts to delete a file they neither own nor administer.
    """
    pass


class InternalInconsistencyError(DocStoreException):
    """
    Raised when stored data contradicts itself: a folder cycle, a broken
    parent chain, or a file record whose blob is missing.
    """
    pass
