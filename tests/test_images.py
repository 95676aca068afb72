import io

import pytest
from PIL import Image
from starlette.datastructures import Headers, UploadFile

from househunt.core.errors import ValidationError
from househunt.utils.images import ImageStore

from conftest import image_bytes


def _upload(data: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def store(tmp_path) -> ImageStore:
    return ImageStore(tmp_path / "uploads", max_bytes=1024 * 1024, max_width=100)


@pytest.mark.asyncio
async def test_no_file_means_empty_url(store):
    assert await store.save(None) == ""
    assert await store.save(_upload(b"", "", "image/png")) == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filename,content_type",
    [
        ("cat.gif", "image/gif"),
        ("cat.png", "image/gif"),
        ("cat.gif", "image/png"),
        ("notes.txt", "text/plain"),
    ],
)
async def test_disallowed_types_rejected(store, filename, content_type):
    with pytest.raises(ValidationError):
        await store.save(_upload(image_bytes("PNG"), filename, content_type))
    assert not store.upload_dir.exists()


@pytest.mark.asyncio
async def test_png_is_downscaled_and_stored_as_jpeg(store):
    url = await store.save(_upload(image_bytes("PNG", size=(400, 200)), "house.PNG", "image/png"))

    assert url.startswith("/uploads/") and url.endswith(".jpg")
    stored = store.upload_dir / url.rsplit("/", 1)[1]
    with Image.open(stored) as img:
        assert img.format == "JPEG"
        assert img.size == (100, 50)


@pytest.mark.asyncio
async def test_small_image_is_not_upscaled(store):
    url = await store.save(_upload(image_bytes("JPEG", size=(40, 30)), "small.jpeg", "image/jpeg"))
    with Image.open(store.upload_dir / url.rsplit("/", 1)[1]) as img:
        assert img.size == (40, 30)


@pytest.mark.asyncio
async def test_unprocessable_image_keeps_original_bytes(store):
    junk = b"definitely not a jpeg"
    url = await store.save(_upload(junk, "broken.jpg", "image/jpeg"))

    assert url.endswith(".jpg")
    assert (store.upload_dir / url.rsplit("/", 1)[1]).read_bytes() == junk


@pytest.mark.asyncio
async def test_oversized_upload_rejected(tmp_path):
    store = ImageStore(tmp_path, max_bytes=10)
    with pytest.raises(ValidationError):
        await store.save(_upload(image_bytes("PNG"), "big.png", "image/png"))


@pytest.mark.asyncio
async def test_size_limit_boundary_reads_no_further(tmp_path):
    store = ImageStore(tmp_path, max_bytes=16)

    url = await store.save(_upload(b"x" * 16, "edge.jpg", "image/jpeg"))
    assert (tmp_path / url.rsplit("/", 1)[1]).read_bytes() == b"x" * 16

    upload = _upload(b"x" * 4096, "big.jpg", "image/jpeg")
    with pytest.raises(ValidationError):
        await store.save(upload)
    assert upload.file.tell() == 17


@pytest.mark.asyncio
async def test_names_are_unique(store):
    data = image_bytes("PNG")
    first = await store.save(_upload(data, "a.png", "image/png"))
    second = await store.save(_upload(data, "a.png", "image/png"))
    assert first != second
