"""Tests for listing image upload."""

from __future__ import annotations

from io import BytesIO
from unittest import mock

from botocore.exceptions import ClientError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from PIL import Image

from apps.properties import media


def image_upload(size=(64, 48), mode="RGB", fmt="PNG") -> SimpleUploadedFile:
    buffer = BytesIO()
    Image.new(mode, size).save(buffer, format=fmt)
    return SimpleUploadedFile(f"photo.{fmt.lower()}", buffer.getvalue())


class UploadImageTests(SimpleTestCase):
    def test_upload_returns_public_url(self) -> None:
        client = mock.Mock()
        with mock.patch("apps.properties.media._client", return_value=client):
            url = media.upload_image(image_upload())

        self.assertTrue(url.startswith("https://media.test/traveltrove/properties/"))
        self.assertTrue(url.endswith(".jpg"))
        kwargs = client.put_object.call_args.kwargs
        self.assertEqual(kwargs["ContentType"], "image/jpeg")
        self.assertTrue(url.endswith(kwargs["Key"]))

    def test_transparent_images_are_stored_as_webp(self) -> None:
        client = mock.Mock()
        with mock.patch("apps.properties.media._client", return_value=client):
            url = media.upload_image(image_upload(mode="RGBA"))

        self.assertTrue(url.endswith(".webp"))

    @override_settings(PHOTO_MAX_DIMENSION=100)
    def test_large_images_are_downscaled(self) -> None:
        client = mock.Mock()
        with mock.patch("apps.properties.media._client", return_value=client):
            media.upload_image(image_upload(size=(400, 200)))

        body = client.put_object.call_args.kwargs["Body"]
        self.assertEqual(Image.open(BytesIO(body)).size, (100, 50))

    def test_rejects_non_images(self) -> None:
        with self.assertRaises(media.MediaUploadError):
            media.upload_image(SimpleUploadedFile("notes.txt", b"not an image"))

    @override_settings(PHOTO_MAX_SIZE=10)
    def test_rejects_oversized_files(self) -> None:
        with self.assertRaisesMessage(media.MediaUploadError, "File too large"):
            media.upload_image(image_upload())

    def test_media_host_errors_are_wrapped(self) -> None:
        client = mock.Mock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchBucket", "Message": "missing"}}, "PutObject"
        )
        with mock.patch("apps.properties.media._client", return_value=client):
            with self.assertRaisesMessage(media.MediaUploadError, "Image upload failed"):
                media.upload_image(image_upload())

    @override_settings(S3_PUBLIC_BASE="", S3_ENDPOINT_URL="http://minio:9000", S3_BUCKET_NAME="photos")
    def test_public_url_falls_back_to_endpoint(self) -> None:
        self.assertEqual(media.public_url("properties/a.jpg"), "http://minio:9000/photos/properties/a.jpg")
