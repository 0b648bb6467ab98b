import urllib.error
import urllib.request

import pytest

from bookpipe.serve import serve


@pytest.fixture
def server(tmp_path):
    (tmp_path / "book.html").write_text("<h1>Essential</h1>", encoding="utf-8")
    httpd = serve(str(tmp_path), 0)
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def url(server, path):
    host, port = server.server_address[:2]
    return f"http://{host}:{port}/{path}"


def test_serves_output_directory(server):
    with urllib.request.urlopen(url(server, "book.html"), timeout=5) as response:
        assert response.status == 200
        assert response.read() == b"<h1>Essential</h1>"


def test_missing_file_is_404(server):
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        urllib.request.urlopen(url(server, "nope.pdf"), timeout=5)
    assert excinfo.value.code == 404


def test_binds_loopback_by_default(server):
    assert server.server_address[0] == "127.0.0.1"
