from http import HTTPStatus


class Rejection(Exception):
    """Failure that the central handler turns into a plain-text response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"


class PayloadTooLarge(Rejection):
    status_code = HTTPStatus.BAD_REQUEST
    message = "Payload too large"


class UploadRejected(Rejection):
    pass


class StorageError(Rejection):
    pass
