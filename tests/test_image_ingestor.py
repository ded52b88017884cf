"""Unit tests for the image ingestor."""

import unittest
import tempfile
import shutil
import io
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from profile_chat.exceptions import DestinationWriteError, InvalidImage, SourceUnavailable
from profile_chat.models.profile import NO_PICTURE
from profile_chat.services.image_ingestor import ImageIngestor
from profile_chat.services.profile_controller import ProfileController
from profile_chat.services.profile_store import ProfileStore
from tests.helpers import make_image_bytes, write_file


class TestImageIngestor(unittest.TestCase):
    """Test cases for ImageIngestor."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.images_dir = os.path.join(self.test_dir, "images")
        self.picked_dir = os.path.join(self.test_dir, "picked")
        os.makedirs(self.picked_dir)
        self.ingestor = ImageIngestor(images_dir=self.images_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def picked(self, name: str, data: bytes) -> str:
        return write_file(os.path.join(self.picked_dir, name), data)

    def read(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def test_ingest_copies_bytes(self):
        data = make_image_bytes("red")
        source = self.picked("red.png", data)

        ref = self.ingestor.ingest(source)

        self.assertEqual(ref, os.path.abspath(os.path.join(self.images_dir, "image.jpg")))
        self.assertEqual(self.read(ref), data)
        self.assertTrue(os.path.exists(source), "source must be copied, not moved")

    def test_ingested_copy_survives_source_removal(self):
        data = make_image_bytes("green")
        source = self.picked("green.png", data)

        ref = self.ingestor.ingest(source)
        os.remove(source)

        self.assertEqual(self.read(ref), data)

    def test_second_ingest_overwrites_first(self):
        first = make_image_bytes("red")
        second = make_image_bytes("blue", size=(8, 8))

        ref1 = self.ingestor.ingest(self.picked("a.png", first))
        ref2 = self.ingestor.ingest(self.picked("b.png", second))

        self.assertEqual(ref1, ref2)
        self.assertEqual(self.read(ref2), second)
        self.assertEqual(os.listdir(self.images_dir), ["image.jpg"])

    def test_accepts_path_and_file_uri(self):
        data = make_image_bytes("white")
        source = self.picked("white.png", data)

        self.assertEqual(self.read(self.ingestor.ingest(Path(source))), data)
        self.assertEqual(self.read(self.ingestor.ingest(Path(source).as_uri())), data)

    def test_accepts_openable_handle(self):
        data = make_image_bytes("black")
        handle = Mock(spec=["open"])
        handle.open.return_value = io.BytesIO(data)

        ref = self.ingestor.ingest(handle)

        self.assertEqual(self.read(ref), data)

    def test_missing_source(self):
        with self.assertRaises(SourceUnavailable):
            self.ingestor.ingest(os.path.join(self.picked_dir, "gone.png"))

        self.assertEqual(self.ingestor.current_ref(), NO_PICTURE)
        self.assertEqual(os.listdir(self.images_dir), [])

    def test_unsupported_uri(self):
        with self.assertRaises(SourceUnavailable):
            self.ingestor.ingest("content://media/picker/0/42")

    def test_handle_that_cannot_open(self):
        handle = Mock(spec=["open"])
        handle.open.side_effect = OSError("revoked")

        with self.assertRaises(SourceUnavailable):
            self.ingestor.ingest(handle)

    def test_non_image_rejected_and_previous_kept(self):
        data = make_image_bytes("red")
        ref = self.ingestor.ingest(self.picked("red.png", data))

        with self.assertRaises(InvalidImage):
            self.ingestor.ingest(self.picked("notes.txt", b"not an image"))

        self.assertEqual(self.read(ref), data)
        self.assertEqual(os.listdir(self.images_dir), ["image.jpg"])

    def test_invalid_image_is_source_unavailable(self):
        self.assertTrue(issubclass(InvalidImage, SourceUnavailable))

    def test_verification_can_be_disabled(self):
        ingestor = ImageIngestor(images_dir=self.images_dir, verify_images=False)

        ref = ingestor.ingest(self.picked("raw.bin", b"\x00\x01\x02"))

        self.assertEqual(self.read(ref), b"\x00\x01\x02")

    def test_destination_write_failure(self):
        source = self.picked("red.png", make_image_bytes("red"))

        with patch("profile_chat.services.image_ingestor.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(DestinationWriteError):
                self.ingestor.ingest(source)

        self.assertEqual(os.listdir(self.images_dir), [])

    def test_read_failure_midway_cleans_up(self):
        stream = MagicMock()
        stream.read.side_effect = [b"\x89PNG", OSError("device gone")]
        stream.__enter__.return_value = stream
        stream.__exit__.return_value = False
        handle = Mock(spec=["open"])
        handle.open.return_value = stream

        with self.assertRaises(SourceUnavailable):
            self.ingestor.ingest(handle)

        stream.__exit__.assert_called_once()
        self.assertEqual(os.listdir(self.images_dir), [])

    def test_current_ref(self):
        self.assertEqual(self.ingestor.current_ref(), NO_PICTURE)

        ref = self.ingestor.ingest(self.picked("red.png", make_image_bytes("red")))

        self.assertEqual(self.ingestor.current_ref(), ref)

    def test_ingest_then_set_picture_round_trip(self):
        """The stored picture reference points at a byte-identical copy of the pick."""
        store = ProfileStore(database_path=os.path.join(self.test_dir, "profile.db"))
        controller = ProfileController(store)
        controller.initialize()
        data = make_image_bytes("purple")

        ref = self.ingestor.ingest(self.picked("purple.png", data))
        controller.set_picture(ref)

        stored = store.get_all()[0]
        self.assertEqual(self.read(stored.picture_ref), data)


if __name__ == '__main__':
    unittest.main()
