"""Failure modes of the path adapter, reproduced with an in-memory store."""
import pytest

from drive_api.adapters.path_adapter import PathAdapter
from drive_api.results import ErrorKind
from tests.fakes import FakeObjectStore, PresignedUrlRejected


@pytest.fixture
def fake_adapter(fake_store: FakeObjectStore) -> PathAdapter:
    return PathAdapter(fake_store, presigned_url_expiry_seconds=600)


def test_rename_delete_failure_leaves_duplicate(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("docs/old.txt", b"content")
    fake_store.fail_delete_for.add("docs/old.txt")

    result = fake_adapter.rename("docs/old.txt", "new.txt")

    assert not result.ok
    assert result.error.kind is ErrorKind.DUPLICATE_OBJECT
    assert result.error.keys == ("docs/old.txt", "docs/new.txt")
    # both keys are observable
    assert set(fake_store.objects) == {"docs/old.txt", "docs/new.txt"}
    assert [f.name for f in fake_adapter.list("docs").value.files] == ["new.txt", "old.txt"]


def test_move_delete_failure_leaves_duplicate(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("inbox/a.txt", b"content")
    fake_store.fail_delete_for.add("inbox/a.txt")

    result = fake_adapter.move("inbox/a.txt", "archive/a.txt")

    assert result.error.kind is ErrorKind.DUPLICATE_OBJECT
    assert set(fake_store.objects) == {"inbox/a.txt", "archive/a.txt"}


def test_copy_failure_changes_nothing(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("inbox/a.txt", b"content")
    fake_store.fail_copy_for.add("inbox/a.txt")

    result = fake_adapter.move("inbox/a.txt", "archive/a.txt")

    assert result.error.kind is ErrorKind.TRANSIENT
    assert set(fake_store.objects) == {"inbox/a.txt"}
    # no delete is attempted after a failed copy
    assert ("delete", "inbox/a.txt") not in fake_store.calls


def test_rename_is_copy_then_delete(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("a.txt", b"content")
    fake_store.calls.clear()

    fake_adapter.rename("a.txt", "b.txt")

    assert fake_store.calls == [("copy", "a.txt", "b.txt"), ("delete", "a.txt")]


def test_failures_are_not_retried(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("a.txt", b"content")
    fake_store.fail_copy_for.add("a.txt")
    fake_store.calls.clear()

    fake_adapter.rename("a.txt", "b.txt")

    assert fake_store.calls == [("copy", "a.txt", "b.txt")]


def test_concurrent_moves_of_one_source_populate_both_destinations(
    fake_store: FakeObjectStore, fake_adapter: PathAdapter
):
    fake_adapter.upload("shared.txt", b"content")
    second = {}
    # the second mover copies after the first copy and before the first delete
    fake_store.after_copy = lambda: second.setdefault("result", fake_adapter.move("shared.txt", "two/shared.txt"))

    first = fake_adapter.move("shared.txt", "one/shared.txt")

    assert first.ok
    assert second["result"].ok
    assert set(fake_store.objects) == {"one/shared.txt", "two/shared.txt"}


def test_presigned_download_url_works_until_expiry(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("docs/a.txt", b"secret report")
    presigned = fake_adapter.get_download_url("docs/a.txt").value

    assert presigned.expires_in == 600
    assert fake_store.open_url(presigned.url, "GET") == b"secret report"

    fake_store.now += 601
    with pytest.raises(PresignedUrlRejected):
        fake_store.open_url(presigned.url, "GET")


def test_presigned_url_is_scoped_to_one_key(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("docs/a.txt", b"a")
    fake_adapter.upload("docs/b.txt", b"b")
    url = fake_adapter.get_download_url("docs/a.txt").value.url

    with pytest.raises(PresignedUrlRejected):
        fake_store.open_url(url.replace("docs/a.txt", "docs/b.txt"), "GET")


def test_presigned_url_is_scoped_to_one_method(fake_store: FakeObjectStore, fake_adapter: PathAdapter):
    fake_adapter.upload("docs/a.txt", b"a")
    download_url = fake_adapter.get_download_url("docs/a.txt").value.url
    upload_url = fake_adapter.get_upload_url("docs/new.txt").value.url

    with pytest.raises(PresignedUrlRejected):
        fake_store.open_url(download_url, "PUT", b"overwrite")
    with pytest.raises(PresignedUrlRejected):
        fake_store.open_url(upload_url, "GET")

    fake_store.open_url(upload_url, "PUT", b"uploaded through url")
    assert [f.name for f in fake_adapter.list("docs").value.files] == ["a.txt", "new.txt"]
