"""Tests for the local image storage adapter."""
import pytest

from catalog_admin.utils.storage import (
    ImageNotFoundError,
    ImageUpload,
    LocalImageStorage,
    StorageError,
)


def test_store_and_load(storage):
    """Test stored bytes can be loaded back under the returned name."""
    filename = storage.store(ImageUpload(content=b"abc", filename="photo.JPG"))

    assert filename.endswith(".jpg")
    assert storage.load(filename).read_bytes() == b"abc"


def test_store_generates_unique_names(storage):
    """Test uploads with the same original name never collide."""
    names = {storage.store(ImageUpload(content=b"x", filename="same.png")) for _ in range(5)}

    assert len(names) == 5


def test_store_drops_suspicious_extension(storage):
    """Test the original name cannot inject path segments."""
    filename = storage.store(ImageUpload(content=b"x", filename="../../etc/passwd"))

    assert "/" not in filename
    assert (storage.root / filename).is_file()


def test_store_empty_upload_fails(storage):
    """Test storing an empty file raises StorageError."""
    with pytest.raises(StorageError):
        storage.store(ImageUpload(content=b"", filename="empty.png"))


def test_store_unwritable_root_fails(tmp_path):
    """Test a write failure is reported as StorageError."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    storage = LocalImageStorage(blocker)

    with pytest.raises(StorageError):
        storage.store(ImageUpload(content=b"x", filename="a.png"))


def test_load_missing(storage):
    """Test loading an absent file raises ImageNotFoundError."""
    with pytest.raises(ImageNotFoundError):
        storage.load("nope.png")


def test_load_uses_trailing_segment(storage, tmp_path):
    """Test only the last segment of a name is resolved."""
    secret = tmp_path / "secret.txt"
    secret.write_text("do not serve")
    filename = storage.store(ImageUpload(content=b"img", filename="a.png"))

    assert storage.load(f"../../{filename}").read_bytes() == b"img"
    with pytest.raises(ImageNotFoundError):
        storage.load("../secret.txt")


def test_delete(storage):
    """Test delete reports whether a file was removed."""
    filename = storage.store(ImageUpload(content=b"x", filename="a.png"))

    assert storage.delete(filename) is True
    assert storage.delete(filename) is False
    assert storage.delete("") is False


def test_list_all(storage):
    """Test listing yields every stored filename."""
    assert list(storage.list_all()) == []

    stored = {storage.store(ImageUpload(content=b"x", filename=f"{i}.png")) for i in range(3)}

    assert set(storage.list_all()) == stored


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("photo.png", "image/png"),
        ("photo.jpg", "image/jpeg"),
        ("photo.gif", "image/gif"),
        ("photo", "application/octet-stream"),
        ("photo.zzzunknown", "application/octet-stream"),
    ],
)
def test_probe_media_type(storage, filename, expected):
    """Test media types are derived from the extension."""
    assert storage.probe_media_type(filename) == expected


@pytest.mark.parametrize(
    "reference, expected",
    [
        ("/api/admin/products/images/abc.png", "abc.png"),
        ("http://localhost:8080/uploads/abc.png?v=2", "abc.png"),
        ("abc.png", "abc.png"),
        ("C:\\uploads\\abc.png", "abc.png"),
        ("/api/admin/products/images/", None),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_extract_filename_from_reference(reference, expected):
    """Test the last path segment is extracted from image references."""
    assert LocalImageStorage.extract_filename_from_reference(reference) == expected


def test_public_url():
    assert LocalImageStorage.public_url("abc.png") == "/api/admin/products/images/abc.png"


def test_delete_io_failure_raises_storage_error(storage):
    """Test a failure other than a missing file is reported as StorageError."""
    # A directory where a file is expected makes unlink fail
    (storage.root / "folder.png").mkdir(parents=True)

    with pytest.raises(StorageError):
        storage.delete("folder.png")

    assert (storage.root / "folder.png").is_dir()


def test_query_characters_are_part_of_stored_name(storage):
    """Test a '?' in a stored name is not treated as a URL delimiter."""
    storage.root.mkdir(parents=True, exist_ok=True)
    (storage.root / "a?b.png").write_bytes(b"literal")
    (storage.root / "a").write_bytes(b"wrong file")

    assert storage.load("a?b.png").read_bytes() == b"literal"
    assert storage.delete("a?b.png") is True
    assert (storage.root / "a").is_file()
