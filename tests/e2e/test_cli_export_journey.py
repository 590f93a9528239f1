"""E2E test: CLI export journey.

Runs `docs-mirror gdoc` and `docs-mirror yadisk` with the HTTP layer served by
httpx.MockTransport and verifies the files saved in the project.
"""

import httpx
import pytest

from src.cli.export_command import ExportCommand
from src.cli.main import app
from tests.helpers.tree_helpers import flatten_output as flat

pytestmark = pytest.mark.e2e

DOC_URL = "https://docs.google.com/document/d/abc123/edit"
YANDEX_URL = "https://disk.yandex.ru/i/abcdef"


def _export_handler(request: httpx.Request) -> httpx.Response:
    fmt = request.url.params.get("format")
    if request.url.host == "docs.google.com" and fmt == "txt":
        return httpx.Response(
            200,
            text="Plan\n",
            headers={"content-disposition": 'attachment; filename="Roadmap.txt"'},
        )
    if request.url.host == "docs.google.com" and fmt == "docx":
        return httpx.Response(
            200,
            content=b"PK\x03\x04",
            headers={"content-disposition": 'attachment; filename="Roadmap.docx"'},
        )
    if request.url.host == "cloud-api.yandex.net":
        return httpx.Response(200, json={"href": "https://downloader.disk.yandex.ru/file/xyz"})
    if request.url.host == "downloader.disk.yandex.ru":
        return httpx.Response(
            200,
            content=b"binary",
            headers={"content-disposition": 'attachment; filename="report.pdf"'},
        )
    return httpx.Response(404)


@pytest.fixture
def export_transport(mocker):
    """Route every ExportCommand built by the CLI through the mock transport."""
    transport = httpx.MockTransport(_export_handler)

    def _build(**kwargs):
        return ExportCommand(transport=transport, load_env_file=False, **kwargs)

    mocker.patch("src.cli.main.ExportCommand", side_effect=_build)
    return transport


class TestCliExportJourney:
    def test_gdoc_default_formats(self, runner, project, export_transport):
        result = runner.invoke(app, ["gdoc", DOC_URL, "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Saved 2 file(s)" in flat(result.output)
        assert (project / "gdocs" / "Roadmap.md").read_text(encoding="utf-8") == "Plan\n"
        assert (project / "gdocs" / "Roadmap.docx").read_bytes() == b"PK\x03\x04"

    def test_gdoc_formats_flag(self, runner, project, export_transport):
        result = runner.invoke(app, ["gdoc", DOC_URL, "-f", "txt", "-o", "out", "--no-color"])

        assert result.exit_code == 0, result.output
        assert [p.name for p in (project / "out").iterdir()] == ["Roadmap.md"]

    def test_gdoc_formats_from_config(self, runner, project, export_transport):
        config = project / ".docs-mirror" / "config.yaml"
        config.parent.mkdir()
        config.write_text("exports: docx\n", encoding="utf-8")

        result = runner.invoke(app, ["gdoc", DOC_URL, "--no-color"])

        assert result.exit_code == 0, result.output
        assert [p.name for p in (project / "gdocs").iterdir()] == ["Roadmap.docx"]

    def test_gdoc_url_from_environment(self, runner, project, export_transport, monkeypatch):
        monkeypatch.setenv("GDOC_URL", DOC_URL)

        result = runner.invoke(app, ["gdoc", "-f", "txt", "--no-color"])

        assert result.exit_code == 0, result.output
        assert (project / "gdocs" / "Roadmap.md").exists()

    def test_gdoc_unsupported_format_is_network_error(self, runner, project, export_transport):
        result = runner.invoke(app, ["gdoc", DOC_URL, "-f", "epub", "--no-color"])

        assert result.exit_code == 4
        assert "Remote error" in flat(result.output)

    def test_yadisk_download(self, runner, project, export_transport):
        result = runner.invoke(app, ["yadisk", YANDEX_URL, "--no-color"])

        assert result.exit_code == 0, result.output
        assert (project / "yadisk" / "report.pdf").read_bytes() == b"binary"
