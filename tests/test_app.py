import io

import pytest

from filezipper.app import create_app


@pytest.fixture
def client(tmp_path):
    app = create_app(str(tmp_path / "data"))
    app.config["TESTING"] = True
    return app.test_client()


def upload(client, url, data, filename):
    return client.post(url, data={"file": (io.BytesIO(data), filename)},
                       content_type="multipart/form-data")


def test_compress_and_decompress_roundtrip(client):
    original = b"%PDF-1.4\n" + b"stream of text and \x00 bytes\n" * 200

    resp = upload(client, "/compress_file", original, "report.pdf")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"]
    assert body["compressed_filename"] == "report.huff"
    assert body["original_size"] == len(original)
    assert body["compressed_size"] < len(original)

    packed = client.get(body["download_url"])
    assert packed.status_code == 200
    container = packed.data

    resp = upload(client, "/decompress_file", container, "report.huff")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["decompressed_file"] == "report.pdf"
    assert body["restored_size"] == len(original)

    restored = client.get(body["download_url"])
    assert restored.data == original

    entries = client.get("/history").get_json()["entries"]
    assert len(entries) == 2


def test_no_file(client):
    resp = client.post("/compress_file", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_empty_upload_is_codec_failure(client):
    resp = upload(client, "/compress_file", b"", "empty.txt")
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "EmptyInputError"


def test_decompress_requires_huff(client):
    resp = upload(client, "/decompress_file", b"whatever", "notes.txt")
    assert resp.status_code == 400


def test_decompress_garbage(client):
    resp = upload(client, "/decompress_file", b"\x01\x02", "junk.huff")
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "MalformedContainerError"


def test_download_missing(client):
    assert client.get("/download/nothing.huff").status_code == 404
