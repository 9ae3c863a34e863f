import pytest

import mwconf.fetch_configuration as fetch_configuration


PAYLOAD = {
    "query": {
        "extensiontags": ["<pre>"],
        "general": {"linktrail": "/^([a-z]+)(.*)$/sD"},
        "magicwords": [{"name": "redirect", "aliases": ["#REDIRECT"]}],
        "namespacealiases": [],
        "namespaces": {
            "6": {"*": "File", "canonical": "File", "id": 6},
            "14": {"*": "Category", "canonical": "Category", "id": 14},
        },
        "protocols": ["http://"],
    }
}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.reason = "OK"
        self.url = "https://example.org/w/api.php"
        self.headers = {"Content-Type": "application/json; charset=utf-8"}

    def json(self):
        return self._payload


class FakeSession:
    instances = []

    def __init__(self, response):
        self.response = response
        self.requests = []
        self.closed = False
        FakeSession.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def get(self, url, headers=None):
        self.requests.append((url, headers))
        return self.response


@pytest.fixture
def fake_session(monkeypatch):
    FakeSession.instances = []
    monkeypatch.delenv("MWCONF_API_PATH", raising=False)
    monkeypatch.delenv("MWCONF_LOG_LEVEL", raising=False)

    def install(response):
        monkeypatch.setattr(
            fetch_configuration.requests, "Session", lambda: FakeSession(response)
        )

    return install


@pytest.mark.parametrize(
    "argv", [[], ["a.example.org", "b.example.org"], ["--bogus"], ["-h"], ["example.org", "--help"]]
)
def test_invalid_use(argv, capsys):
    assert fetch_configuration.main(argv) == 1
    captured = capsys.readouterr()
    assert captured.err.strip() == "Invalid use."
    assert captured.out == ""


def test_main_emits_configuration(fake_session, capsys):
    fake_session(FakeResponse(PAYLOAD))

    assert fetch_configuration.main(["example.org"]) == 0

    out = capsys.readouterr().out
    assert 'category_namespaces: &["category"]' in out
    assert 'file_namespaces: &["file"]' in out
    assert 'redirect_magic_words: &["REDIRECT"]' in out
    assert 'extension_tags: &["pre"]' in out
    assert 'protocols: &["http://"]' in out
    assert 'link_trail: "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"' in out
    session = FakeSession.instances[0]
    assert session.closed
    assert session.requests[0][0].startswith("https://example.org/w/api.php?")


def test_main_writes_output_file(fake_session, tmp_path, capsys):
    fake_session(FakeResponse(PAYLOAD))
    target = tmp_path / "configuration.rs"

    assert fetch_configuration.main(["example.org", "--output", str(target)]) == 0

    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8").startswith("pub fn create_configuration()")


def test_main_reports_fetch_errors(fake_session, capsys):
    fake_session(FakeResponse(PAYLOAD, status_code=503))

    assert fetch_configuration.main(["example.org"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("The status of the response is not as expected.")


def test_main_reports_invalid_url(capsys):
    assert fetch_configuration.main(["bad host"]) == 1
    assert capsys.readouterr().err.startswith("Invalid URL: ")


def test_main_reports_configuration_errors(fake_session, capsys):
    payload = {"query": dict(PAYLOAD["query"], magicwords=[])}
    fake_session(FakeResponse(payload))

    assert fetch_configuration.main(["example.org"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "Redirect magic word missing."
