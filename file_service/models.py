from http import HTTPStatus

from pydantic import BaseModel


def status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


class UploadResponse(BaseModel):
    filename: str | None = None
    status: str


class DeleteResponse(BaseModel):
    status: str
