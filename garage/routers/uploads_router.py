from fastapi import APIRouter, Depends, File, Request, UploadFile
import logging

from ..schemas.uploads.upload import Base64UploadRequest, UploadResponse
from ..schemas.common.common import ErrorResponse
from ..application.services.image_service import ImageService
from ..exceptions import MissingField

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/upload",
    tags=["Uploads"],
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_image_service(request: Request) -> ImageService:
    settings = request.app.state.settings
    return ImageService(
        storage=request.app.state.storage,
        max_size=settings.MAX_FILE_SIZE,
        default_extension=settings.DEFAULT_IMAGE_EXTENSION,
    )


@router.post("", response_model=UploadResponse)
def upload_base64_image(
    payload: Base64UploadRequest,
    image_service: ImageService = Depends(get_image_service),
):
    logger.info("Base64 upload start")
    image_url = image_service.ingest_base64(payload.image, payload.fileName)
    return UploadResponse(imageUrl=image_url)


@router.post("/file", response_model=UploadResponse)
def upload_image_file(
    file: UploadFile = File(None),
    image_service: ImageService = Depends(get_image_service),
):
    if file is None:
        raise MissingField("At least one file must be uploaded.")
    # Read one byte past the ceiling so oversize files fail without buffering them whole
    data = file.file.read(image_service.max_size + 1)
    image_url = image_service.ingest_file(
        data,
        filename=file.filename,
        content_type=file.content_type,
        declared_size=file.size,
    )
    return UploadResponse(imageUrl=image_url)
