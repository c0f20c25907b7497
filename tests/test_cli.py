import json

from conftest import FakeResponse, FakeSession, token_response
from enzona_payments import cli
from enzona_payments.core.client import PaymentClient


def _patch_client(monkeypatch, session):
    def fake_create_client(*, config, **kwargs):
        return PaymentClient(config, session=session, base_url="https://api.test/")

    monkeypatch.setattr(cli, "create_client", fake_create_client)


CREDENTIALS = ["--env-file", "/nonexistent", "--set", "ENZONA_CLIENT_ID=id", "--set", "ENZONA_CLIENT_SECRET=s"]


def test_endpoints_command_prints_table(capsys):
    assert cli.run_cli(["endpoints"]) == 0
    table = json.loads(capsys.readouterr().out)
    assert table["confirm_payment"] == {
        "method": "POST",
        "path": "payments/{transactionUuid}/confirm",
        "query": [],
        "body": True,
    }


def test_missing_credentials_exit_with_error(monkeypatch):
    monkeypatch.delenv("ENZONA_CLIENT_ID", raising=False)
    monkeypatch.delenv("ENZONA_CLIENT_SECRET", raising=False)
    assert cli.run_cli(["--env-file", "/nonexistent", "token"]) == 1


def test_token_command(monkeypatch, capsys):
    session = FakeSession(token_responses=[token_response()])
    _patch_client(monkeypatch, session)
    assert cli.run_cli(CREDENTIALS + ["token"]) == 0
    assert json.loads(capsys.readouterr().out) == {"authenticated": True}


def test_payment_command_prints_details(monkeypatch, capsys):
    session = FakeSession(
        responses=[FakeResponse(200, {"transactionUuid": "t-1", "statusCode": "1111"})],
        token_responses=[token_response()],
    )
    _patch_client(monkeypatch, session)
    assert cli.run_cli(CREDENTIALS + ["payment", "t-1"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["transaction_uuid"] == "t-1"


def test_api_error_exits_with_error(monkeypatch):
    session = FakeSession(
        responses=[FakeResponse(404, "missing")],
        token_responses=[token_response()],
    )
    _patch_client(monkeypatch, session)
    assert cli.run_cli(CREDENTIALS + ["refund-details", "t-1"]) == 1


def test_empty_transaction_uuid_exits_with_error(monkeypatch):
    session = FakeSession(token_responses=[token_response()])
    _patch_client(monkeypatch, session)
    assert cli.run_cli(CREDENTIALS + ["payment", ""]) == 1
    assert session.requests == []
