"""End-to-end tests of the command line against a temporary data dir."""

import base64
import json

import pytest
from click.testing import CliRunner

from orderdesk.infrastructure import bootstrap
from orderdesk.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("ORDERDESK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("ORDERDESK_DATABASE_URL", raising=False)
    bootstrap.reset()
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args), catch_exceptions=False)

    result = invoke(
        "db", "init",
        "--admin-email", "admin@example.com",
        "--admin-password", "adminpw",
    )
    assert result.exit_code == 0, result.output
    yield invoke
    bootstrap.reset()


def _login(run, email: str, password: str) -> None:
    result = run("auth", "login", "--email", email, "--password", password)
    assert result.exit_code == 0, result.output


def _seed_catalog(run) -> None:
    """As admin: product #1 (Widget $10.00 x5) and customer #2."""
    _login(run, "admin@example.com", "adminpw")
    assert run("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "5").exit_code == 0
    assert run(
        "user", "add", "--name", "Carol", "--email", "carol@example.com",
        "--password", "carolpw", "--role", "Customer",
    ).exit_code == 0


class TestAuth:

    def test_commands_need_a_session(self, run):
        result = run("product", "list")
        assert result.exit_code == 1
        assert "Not logged in" in result.output

    def test_login_whoami_logout(self, run):
        _login(run, "admin@example.com", "adminpw")
        assert "admin@example.com" in run("auth", "whoami").output
        assert "Logged out" in run("auth", "logout").output
        assert run("auth", "whoami").exit_code == 1

    def test_bad_password(self, run):
        result = run("auth", "login", "--email", "admin@example.com", "--password", "nope")
        assert result.exit_code == 1
        assert "Invalid credentials" in result.output

    def test_edited_session_file_is_not_trusted(self, run, tmp_path):
        _seed_catalog(run)
        _login(run, "carol@example.com", "carolpw")
        path = tmp_path / "data" / "session.token"
        header, payload, signature = path.read_text().split(".")
        claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
        claims["sub"] = "1"
        payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
        path.write_text(".".join([header, payload, signature]))

        result = run("user", "list")
        assert result.exit_code == 1
        assert "Not logged in" in result.output
        result = run("auth", "whoami")
        assert result.exit_code == 1
        assert "Not logged in" in result.output

    def test_hand_written_session_file_is_not_trusted(self, run, tmp_path):
        _seed_catalog(run)
        run("auth", "logout")
        path = tmp_path / "data" / "session.token"
        path.write_text(json.dumps({"user_id": 1, "expires_at": "2999-01-01T00:00:00+00:00"}))

        result = run("user", "list")
        assert result.exit_code == 1
        assert "Not logged in" in result.output


class TestOrderWorkflow:

    def test_scenario_through_the_cli(self, run):
        _seed_catalog(run)

        result = run("order", "create", "--customer", "2", "--item", "1:3")
        assert result.exit_code == 0, result.output
        assert "Order #1 created" in result.output
        assert "$30.00" in result.output

        result = run("item", "update", "--id", "1", "--qty", "5")
        assert result.exit_code == 0, result.output
        assert "$50.00" in result.output

        result = run("item", "add", "--order", "1", "--product", "1", "--qty", "1")
        assert result.exit_code == 1
        assert "Insufficient stock for Widget (need 1, have 0 available)" in result.output

        result = run("order", "delete", "--id", "1")
        assert result.exit_code == 1
        assert "remove them" in result.output

        assert run("item", "remove", "--id", "1").exit_code == 0
        assert "Stock:       5" in run("product", "show", "--id", "1").output
        assert "$0.00" in run("order", "show", "--id", "1").output
        assert run("order", "delete", "--id", "1").exit_code == 0

    def test_status_change(self, run):
        _seed_catalog(run)
        run("order", "create", "--customer", "2")
        result = run("order", "status", "--id", "1", "in_process")
        assert result.exit_code == 0, result.output
        assert "InProcess" in result.output

    def test_bad_item_format(self, run):
        _seed_catalog(run)
        result = run("order", "create", "--item", "widget")
        assert result.exit_code == 2
        assert "ProductID:Quantity" in result.output


class TestCustomerRestrictions:

    def test_customer_cannot_manage_catalog(self, run):
        _seed_catalog(run)
        _login(run, "carol@example.com", "carolpw")
        result = run("product", "add", "--name", "Gizmo", "--price", "1.00")
        assert result.exit_code == 1
        assert "Access denied" in result.output

    def test_customer_only_sees_own_orders(self, run):
        _seed_catalog(run)
        run("order", "create")  # order #1 belongs to the admin
        _login(run, "carol@example.com", "carolpw")
        run("order", "create", "--item", "1:2")

        listing = run("order", "list").output
        assert "Carol" in listing
        assert "Administrator" not in listing

        result = run("order", "show", "--id", "1")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_customer_cannot_order_for_someone_else(self, run):
        _seed_catalog(run)
        _login(run, "carol@example.com", "carolpw")
        result = run("order", "create", "--customer", "1")
        assert result.exit_code == 1
        assert "only create orders for themselves" in result.output

    def test_customer_cannot_change_order_status(self, run):
        _seed_catalog(run)
        _login(run, "carol@example.com", "carolpw")
        run("order", "create", "--item", "1:1")

        result = run("order", "status", "--id", "1", "delivered")
        assert result.exit_code == 1
        assert "Access denied" in result.output
        assert "Pending" in run("order", "show", "--id", "1").output

    def test_customer_can_still_edit_own_line_items(self, run):
        _seed_catalog(run)
        _login(run, "carol@example.com", "carolpw")
        run("order", "create", "--item", "1:1")

        result = run("item", "update", "--id", "1", "--qty", "2")
        assert result.exit_code == 0, result.output
