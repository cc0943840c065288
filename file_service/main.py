from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from file_service.config import Settings, get_settings
from file_service.errors import PayloadTooLarge, Rejection, UploadRejected
from file_service.extensions import extension_for
from file_service.logging_config import setup_logger
from file_service.models import DeleteResponse, UploadResponse, status_line
from file_service.storage import LocalFileStorage

logger = setup_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    storage = LocalFileStorage(settings.storage_dir)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if not storage.exists():
            logger.warning("storage directory %s does not exist", storage.root)
        logger.info("Server started at localhost: %s", settings.port)
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_headers(request: Request, call_next):
        for key, value in request.headers.items():
            logger.info("%s: %s", key, value)
        return await call_next(request)

    @app.exception_handler(Rejection)
    async def rejection_handler(request: Request, exc: Rejection):
        if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error("unhandled error on %s %s: %r", request.method, request.url.path, exc)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        message = str(exc.detail) if exc.detail else HTTPStatus(exc.status_code).phrase
        return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)

    async def enforce_upload_limit(request: Request) -> None:
        declared = request.headers.get("content-length")
        if declared is None:
            # Chunked body: stop reading as soon as the cap is passed
            chunks = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > settings.max_upload_size_bytes:
                    raise PayloadTooLarge()
                chunks.append(chunk)
            # Starlette replays a cached body to the form parser
            request._body = b"".join(chunks)
            return
        try:
            too_large = int(declared) > settings.max_upload_size_bytes
        except ValueError:
            too_large = True
        if too_large:
            raise PayloadTooLarge()

    @app.post(
        "/upload",
        response_model=UploadResponse,
        response_model_exclude_none=True,
        dependencies=[Depends(enforce_upload_limit)],
    )
    async def upload(request: Request):
        content_type = request.headers.get("content-type", "")
        if not content_type.lower().startswith("multipart/form-data"):
            logger.error("Rejected upload with content-type %r", content_type)
            raise UploadRejected("upload body is not multipart/form-data")

        try:
            form = await request.form(max_part_size=settings.max_upload_size_bytes)
        except StarletteHTTPException as exc:
            logger.error("Error reading file part: %s", exc.detail)
            raise UploadRejected(str(exc.detail)) from exc

        filename = None
        try:
            for field_name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    content_type = value.content_type
                    try:
                        data = await value.read()
                    except OSError as exc:
                        logger.error("reading file error: %s", exc)
                        raise UploadRejected(f"could not read part {field_name}") from exc
                else:
                    content_type = None
                    data = value.encode("utf-8")

                extension = extension_for(content_type) if field_name == "file" else ""
                logger.info(
                    "Received file part: name=%s content_type=%s size=%d",
                    field_name,
                    content_type,
                    len(data),
                )
                # Only the last part's name is reported
                filename = await storage.put(data, extension)
        finally:
            await form.close()

        return UploadResponse(filename=filename, status=status_line(HTTPStatus.OK))

    @app.get("/files", response_model=list[str])
    async def list_files():
        return await storage.list_names()

    @app.delete("/files/{name}", response_model=DeleteResponse)
    async def delete_file(name: str):
        # Transport status stays 200 even when the body reports 404
        if await storage.delete(name):
            return DeleteResponse(status=status_line(HTTPStatus.OK))
        return DeleteResponse(status=status_line(HTTPStatus.NOT_FOUND))

    app.mount("/file", StaticFiles(directory=settings.storage_dir, check_dir=False), name="file")

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
