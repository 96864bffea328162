from argparse import Namespace
from contextlib import asynccontextmanager

import pytest

from esfields import __main__ as cli
from esfields.models import IndexMappingResponse
from tests.tools import FakeMappingFetcher


@pytest.fixture()
def fake_elastic(monkeypatch, fetcher):
    """Make the CLI use the fetcher fixture instead of connecting to elastic"""
    requested = []

    @asynccontextmanager
    async def no_connection():
        yield

    def client(elastic, index):
        requested.append(index)
        return fetcher

    monkeypatch.setattr(cli, "elastic_connection", no_connection)
    monkeypatch.setattr(cli, "es", lambda: None)
    monkeypatch.setattr(cli, "ElasticMappingClient", client)
    return requested


@pytest.mark.anyio
async def test_list_fields(fake_elastic, fetcher, capsys):
    await cli.list_fields(Namespace(index="logs", type=None, ref_id="A"))
    assert fake_elastic == ["logs"]
    assert fetcher.calls == 1
    assert capsys.readouterr().out.splitlines() == ["name\ttype", "host\ttext", "metrics.cpu\tfloat"]


@pytest.mark.anyio
async def test_list_fields_filtered(fake_elastic, capsys):
    await cli.list_fields(Namespace(index="logs", type="number", ref_id="A"))
    assert capsys.readouterr().out.splitlines() == ["name\ttype", "metrics.cpu\tfloat"]


@pytest.mark.anyio
async def test_list_fields_error(capsys):
    fetcher = FakeMappingFetcher(IndexMappingResponse(error="index_not_found_exception"))
    with pytest.raises(SystemExit):
        await cli.print_fields(fetcher, None, "A")
    assert capsys.readouterr().out == ""


def test_check_schema(tmp_path, capsys):
    cli.check_schema(Namespace(plugin_root=str(tmp_path), instance_root=str(tmp_path)))
    assert capsys.readouterr().out.strip() == "dashboardFamily: 1 schema version(s), latest 0.0"


def test_check_schema_error(tmp_path):
    package_dir = tmp_path / "dashboardschema"
    package_dir.mkdir()
    (package_dir / "dashboard.json").write_text("{not json")
    with pytest.raises(SystemExit):
        cli.check_schema(Namespace(plugin_root=str(tmp_path), instance_root=str(tmp_path)))


def test_show_config(capsys):
    cli.show_config(Namespace())
    out = capsys.readouterr().out
    assert "esfields_elastic_version=" in out
    assert "esfields_index=" in out
    assert "esfields_host=" not in out
