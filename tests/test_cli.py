import json

import pytest
from typer.testing import CliRunner

from cloudops.cli import cli as cli_module
from cloudops.cli.commands import apis as apis_commands
from cloudops.core.binders import NO_BUCKET_LOGGING_XML
from cloudops.core.providers import VCLOUD

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CLOUDOPS_CONFIG_FILE", str(tmp_path / "missing.cfg"))
    for name in ("CLOUDOPS_PROVIDER", "CLOUDOPS_ENDPOINT", "CLOUDOPS_IDENTITY", "CLOUDOPS_CREDENTIAL"):
        monkeypatch.delenv(name, raising=False)


def test_apis_list_shows_builtins():
    result = runner.invoke(cli_module.app, ["apis", "list"])

    assert result.exit_code == 0
    for api_id in ("vcloud", "azureblob", "s3", "cloudstack", "openstack-nova"):
        assert api_id in result.output


def test_apis_list_filters_on_type():
    result = runner.invoke(cli_module.app, ["apis", "list", "--type", "blobstore"])

    assert result.exit_code == 0
    assert "azureblob" in result.output
    assert "vcloud" not in result.output


def test_apis_list_rejects_unknown_type():
    result = runner.invoke(cli_module.app, ["apis", "list", "--type", "spaceship"])

    assert result.exit_code == 2
    assert "Unknown API type" in result.output


def test_apis_show_by_id():
    result = runner.invoke(cli_module.app, ["apis", "show", "azureblob"])

    assert result.exit_code == 0
    assert "Microsoft Azure Blob Service API" in result.output
    assert "Account Name" in result.output
    assert "http://msdn.microsoft.com/en-us/library/dd135733.aspx" in result.output


def test_apis_show_unknown_id_fails():
    result = runner.invoke(cli_module.app, ["apis", "show", "nope"])

    assert result.exit_code == 1
    assert "No API registered with id 'nope'" in result.output


def test_apis_show_prompts_when_id_missing(monkeypatch):
    monkeypatch.setattr(apis_commands, "select_api", lambda apis: VCLOUD)

    result = runner.invoke(cli_module.app, ["apis", "show"])

    assert result.exit_code == 0
    assert "VCloud 1.0 API" in result.output


def test_s3_logging_body_renders_document_and_headers():
    result = runner.invoke(
        cli_module.app,
        [
            "s3",
            "logging-body",
            "--bucket",
            "logs",
            "--prefix",
            "access-",
            "--grant",
            "group:AllUsers=READ",
            "--grant",
            "user:abc123:Alice=FULL_CONTROL",
        ],
    )

    assert result.exit_code == 0
    assert "Content-Type" in result.output
    assert "text/xml" in result.output
    assert "<TargetBucket>logs</TargetBucket>" in result.output
    assert "<URI>AllUsers</URI>" in result.output
    assert "<DisplayName>Alice</DisplayName>" in result.output


def test_s3_logging_body_disable():
    result = runner.invoke(cli_module.app, ["s3", "logging-body", "--disable"])

    assert result.exit_code == 0
    assert NO_BUCKET_LOGGING_XML in result.output
    assert "Content-Length" in result.output
    assert str(len(NO_BUCKET_LOGGING_XML)) in result.output


def test_s3_logging_body_requires_bucket():
    result = runner.invoke(cli_module.app, ["s3", "logging-body"])

    assert result.exit_code == 2
    assert "--bucket" in result.output


def test_s3_logging_body_rejects_bad_grant():
    result = runner.invoke(
        cli_module.app, ["s3", "logging-body", "--bucket", "logs", "--grant", "role:x=READ"]
    )

    assert result.exit_code == 2
    assert "Unknown grantee kind" in result.output


def test_cloudstack_extraction_lists_sorted_records(tmp_path):
    path = tmp_path / "extractions.json"
    path.write_text(
        json.dumps(
            [
                {"id": 9, "name": "debian", "extractMode": "FTP_UPLOAD", "uploadpercentage": 50},
                {"id": 4, "name": "centos", "extractMode": "HTTP_DOWNLOAD", "zonename": "Basic1"},
            ]
        )
    )

    result = runner.invoke(cli_module.app, ["cloudstack", "extraction", str(path)])

    assert result.exit_code == 0
    assert result.output.index("centos") < result.output.index("debian")
    assert "50%" in result.output


def test_cloudstack_extraction_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    result = runner.invoke(cli_module.app, ["cloudstack", "extraction", str(path)])

    assert result.exit_code == 2
    assert "Invalid JSON" in result.output


def test_cloudstack_extraction_malformed_job_response(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(json.dumps({"queryasyncjobresultresponse": []}))

    result = runner.invoke(cli_module.app, ["cloudstack", "extraction", str(path)])

    assert result.exit_code == 1
    assert "Could not decode extractions" in result.output


def test_config_show_masks_credential(monkeypatch):
    monkeypatch.setenv("CLOUDOPS_PROVIDER", "s3")
    monkeypatch.setenv("CLOUDOPS_IDENTITY", "AKIDEXAMPLE")
    monkeypatch.setenv("CLOUDOPS_CREDENTIAL", "top-secret")

    result = runner.invoke(cli_module.app, ["config", "show"])

    assert result.exit_code == 0
    assert "https://s3.amazonaws.com" in result.output
    assert "AKIDEXAMPLE" in result.output
    assert "top-secret" not in result.output
    assert "****" in result.output


def test_config_show_without_provider_fails():
    result = runner.invoke(cli_module.app, ["config", "show"])

    assert result.exit_code == 1
    assert "No provider configured" in result.output
