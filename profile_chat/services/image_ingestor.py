"""Copies picked images into the app's own storage."""

import os
import tempfile
import threading
from typing import BinaryIO
from urllib.parse import urlparse
from urllib.request import url2pathname

from PIL import Image

from ..config.defaults import SYSTEM_CONSTANTS
from ..exceptions import DestinationWriteError, InvalidImage, SourceUnavailable
from ..logging_config import get_logger
from ..models.profile import NO_PICTURE
from .error_handler import global_error_handler, ErrorSeverity, records_errors
from .interfaces import ExternalImageHandle, ImageIngestorInterface

logger = get_logger("image_ingestor")


class ImageIngestor(ImageIngestorInterface):
    """Copies a picked image into the single profile picture slot.

    The destination name is fixed, so each ingest replaces the previous
    picture. The copy is staged in a temporary file next to the destination
    and moved into place only once complete, so a failed ingest leaves the
    previous picture intact. Calls are serialized by an internal lock.
    """

    def __init__(self,
                 images_dir: str = "data/images",
                 image_filename: str = "image.jpg",
                 verify_images: bool = True,
                 chunk_size: int = SYSTEM_CONSTANTS["COPY_CHUNK_SIZE"]):
        """
        Initialize the ingestor.

        Args:
            images_dir: Directory holding the profile picture
            image_filename: Fixed file name of the profile picture
            verify_images: Reject sources Pillow cannot identify as an image
            chunk_size: Bytes copied per read
        """
        self.images_dir = images_dir
        self.image_filename = image_filename
        self.verify_images = verify_images
        self.chunk_size = chunk_size
        self._lock = threading.Lock()

        os.makedirs(self.images_dir, exist_ok=True)
        global_error_handler.register_component("image_ingestor")

    @property
    def destination_path(self) -> str:
        return os.path.abspath(os.path.join(self.images_dir, self.image_filename))

    def current_ref(self) -> str:
        """Reference to the ingested picture, or the no-picture sentinel."""
        path = self.destination_path
        return path if os.path.isfile(path) else NO_PICTURE

    @records_errors("image_ingestor", ErrorSeverity.MEDIUM)
    def ingest(self, source: ExternalImageHandle) -> str:
        """Copy source into the picture slot and return the local path."""
        with self._lock:
            destination = self.destination_path
            staged_path = self._stage_copy(source)
            try:
                if self.verify_images:
                    self._verify_image(staged_path)

                try:
                    os.replace(staged_path, destination)
                except OSError as e:
                    raise DestinationWriteError(f"Cannot write {destination}: {e}") from e
            finally:
                if os.path.exists(staged_path):
                    os.remove(staged_path)

        logger.info(f"Ingested picture into {destination}")
        return destination

    def _stage_copy(self, source: ExternalImageHandle) -> str:
        """Stream source into a temporary file beside the destination."""
        try:
            fd, staged_path = tempfile.mkstemp(
                prefix=".ingest-", suffix=".tmp", dir=self.images_dir
            )
        except OSError as e:
            raise DestinationWriteError(f"Cannot create file in {self.images_dir}: {e}") from e

        copied = 0
        try:
            with os.fdopen(fd, "wb") as output, self._open_source(source) as input_stream:
                while True:
                    try:
                        chunk = input_stream.read(self.chunk_size)
                    except OSError as e:
                        raise SourceUnavailable(f"Reading picked image failed: {e}") from e
                    if not chunk:
                        break
                    try:
                        output.write(chunk)
                    except OSError as e:
                        raise DestinationWriteError(f"Writing picture copy failed: {e}") from e
                    copied += len(chunk)
        except BaseException:
            if os.path.exists(staged_path):
                os.remove(staged_path)
            raise

        logger.debug(f"Copied {copied} bytes from picked image")
        return staged_path

    def _open_source(self, source: ExternalImageHandle) -> BinaryIO:
        if source is None:
            raise SourceUnavailable("No image was picked")

        try:
            if isinstance(source, (str, os.PathLike)):
                return open(self._source_path(source), "rb")
            return source.open()
        except SourceUnavailable:
            raise
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise SourceUnavailable(f"Cannot open picked image {source!r}: {e}") from e

    @staticmethod
    def _source_path(source) -> str:
        path = os.fspath(source)
        if path.startswith("file:"):
            parsed = urlparse(path)
            if parsed.netloc not in ("", "localhost"):
                raise SourceUnavailable(f"Unsupported file URI host: {parsed.netloc}")
            path = url2pathname(parsed.path)
        elif "://" in path:
            raise SourceUnavailable(f"Unsupported image reference: {path}")
        return path

    @staticmethod
    def _verify_image(path: str) -> None:
        try:
            with Image.open(path) as image:
                image.verify()
        except Exception as e:
            raise InvalidImage(f"Picked file is not a readable image: {e}") from e
