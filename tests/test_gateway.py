"""
Tests for the Supabase-backed storage and identity gateway.

The SDK client is a MagicMock injected into SupabaseClient; no network.
"""

import datetime as dt
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from eazzy.config import SupabaseSettings
from eazzy.models import PaymentScheduleEntry, UserProfile
from eazzy.services.auth import (
    AuthenticationError,
    IdentityGateway,
    RemoteUnavailableError,
)
from eazzy.services.auth.gateway import UNCONFIGURED_MESSAGE
from eazzy.services.storage import (
    ProfileStorageInterface,
    StorageError,
    StorageNotConfiguredError,
    SupabaseClient,
    SupabaseTransactionStorage,
)


ROW = {
    "id": "b3e1",
    "user_id": "user-1",
    "descricao": "Mercado",
    "valor": 150.0,
    "categoria": "Alimentação",
    "data": "2024-03-10",
    "tipo": "despesa",
    "created_at": "2024-03-10T12:00:00+00:00",
}


@pytest.fixture
def sdk():
    return MagicMock()


@pytest.fixture
def client(sdk):
    return SupabaseClient(SupabaseSettings(), client=sdk)


@pytest.fixture
def unconfigured_client():
    return SupabaseClient(SupabaseSettings(url="", anon_key=""))


def _profile() -> UserProfile:
    return UserProfile(
        name="Ana",
        email="ana@example.com",
        salary=Decimal("3000"),
        payment_schedule=[PaymentScheduleEntry(day=10, amount=Decimal("3000"))],
        total_income=Decimal("3000"),
    )


def _auth_response(user_id="user-1", email="ana@example.com", metadata=None, token="tok"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email, user_metadata=metadata or {"nome": "Ana"}),
        session=SimpleNamespace(access_token=token),
    )


class RecordingProfileStorage(ProfileStorageInterface):
    def __init__(self, fail=False):
        self.profiles = []
        self.fail = fail

    def insert_profile(self, profile: UserProfile) -> bool:
        if self.fail:
            raise StorageError("duplicate key")
        self.profiles.append(profile)
        return True


class TestSupabaseSettings:
    """Tests for credential detection."""

    def test_missing_credentials(self):
        """Test that empty values are unconfigured."""
        assert SupabaseSettings(url="", anon_key="").is_configured is False
        assert SupabaseSettings(url="https://x.supabase.co", anon_key="").is_configured is False

    def test_placeholder_credentials(self):
        """Test that template placeholders count as unconfigured."""
        settings = SupabaseSettings(url="https://placeholder.supabase.co", anon_key="key")
        assert settings.is_configured is False

    def test_real_credentials(self):
        """Test that real-looking values are configured."""
        settings = SupabaseSettings(url="https://abc.supabase.co", anon_key="eyJhbGci")
        assert settings.is_configured is True


class TestSupabaseClient:
    """Tests for the SDK wrapper."""

    def test_injected_client_is_configured(self, client, sdk):
        """Test that an injected SDK client is used as is."""
        assert client.is_configured is True
        assert client.connect() is sdk

    def test_connect_without_credentials_raises(self, unconfigured_client):
        """Test that connect refuses to build a client without credentials."""
        with pytest.raises(StorageNotConfiguredError):
            unconfigured_client.connect()


class TestSupabaseTransactionStorage:
    """Tests for the transactions table access."""

    def test_insert_sends_record_and_returns_row(self, client, sdk, make_draft):
        """Test that insert sends the stored column names."""
        sdk.table.return_value.insert.return_value.execute.return_value = SimpleNamespace(data=[ROW])
        storage = SupabaseTransactionStorage(client)

        stored = storage.insert(make_draft())

        sdk.table.assert_called_with("transactions")
        sent = sdk.table.return_value.insert.call_args.args[0]
        assert sent["descricao"] == "Mercado"
        assert sent["valor"] == 150.0
        assert "id" not in sent
        assert stored.id == "b3e1"
        assert stored.amount == Decimal("150.0")

    def test_insert_accepts_numeric_id(self, client, sdk, make_draft):
        """Test that a bigint id comes back as a string."""
        sdk.table.return_value.insert.return_value.execute.return_value = SimpleNamespace(
            data=[{**ROW, "id": 42}],
        )
        assert SupabaseTransactionStorage(client).insert(make_draft()).id == "42"

    def test_insert_with_no_row_is_an_error(self, client, sdk, make_draft):
        """Test that an empty insert response is a failure."""
        sdk.table.return_value.insert.return_value.execute.return_value = SimpleNamespace(data=[])
        with pytest.raises(StorageError, match="no row"):
            SupabaseTransactionStorage(client).insert(make_draft())

    def test_network_error_becomes_storage_error(self, client, sdk, make_draft):
        """Test that SDK exceptions are wrapped."""
        sdk.table.return_value.insert.return_value.execute.side_effect = ConnectionError("offline")
        with pytest.raises(StorageError, match="offline"):
            SupabaseTransactionStorage(client).insert(make_draft())

    def test_delete_filters_by_id(self, client, sdk):
        """Test the delete query."""
        assert SupabaseTransactionStorage(client).delete("b3e1") is True
        sdk.table.return_value.delete.return_value.eq.assert_called_with("id", "b3e1")

    def test_list_for_owner_query(self, client, sdk):
        """Test that the list is filtered by owner and ordered by date descending."""
        query = sdk.table.return_value.select.return_value.eq.return_value.order.return_value
        query.execute.return_value = SimpleNamespace(data=[ROW])

        rows = SupabaseTransactionStorage(client).list_for_owner("user-1")

        sdk.table.return_value.select.assert_called_with("*")
        sdk.table.return_value.select.return_value.eq.assert_called_with("user_id", "user-1")
        sdk.table.return_value.select.return_value.eq.return_value.order.assert_called_with(
            "data", desc=True,
        )
        assert rows[0].date == dt.date(2024, 3, 10)

    def test_malformed_row_is_storage_error(self, client, sdk):
        """Test that a row that does not parse is reported as a storage failure."""
        query = sdk.table.return_value.select.return_value.eq.return_value.order.return_value
        query.execute.return_value = SimpleNamespace(data=[{"id": "x"}])
        with pytest.raises(StorageError, match="Malformed"):
            SupabaseTransactionStorage(client).list_for_owner("user-1")


class TestIdentityGatewayUnconfigured:
    """Tests for the gateway without credentials."""

    def test_not_available(self, unconfigured_client):
        """Test availability flag."""
        assert IdentityGateway(unconfigured_client).is_available is False

    def test_sign_in_fails_fast(self, unconfigured_client):
        """Test that sign-in reports the configuration message."""
        with pytest.raises(RemoteUnavailableError, match="Supabase não está configurado"):
            IdentityGateway(unconfigured_client).sign_in("a@b.c", "secret")

    def test_sign_up_fails_fast(self, unconfigured_client):
        """Test that sign-up reports the configuration message."""
        with pytest.raises(RemoteUnavailableError) as exc_info:
            IdentityGateway(unconfigured_client).sign_up("a@b.c", "secret", _profile())
        assert str(exc_info.value) == UNCONFIGURED_MESSAGE

    def test_sign_out_and_session_are_quiet(self, unconfigured_client):
        """Test that sign-out is a no-op and there is no session."""
        gateway = IdentityGateway(unconfigured_client)
        gateway.sign_out()
        assert gateway.current_session() is None


class TestIdentityGateway:
    """Tests for the gateway with a mocked SDK."""

    def test_sign_in(self, client, sdk):
        """Test a successful sign-in."""
        sdk.auth.sign_in_with_password.return_value = _auth_response()

        user = IdentityGateway(client).sign_in("ana@example.com", "secret")

        sdk.auth.sign_in_with_password.assert_called_once_with({
            "email": "ana@example.com",
            "password": "secret",
        })
        assert user.user_id == "user-1"
        assert user.display_name == "Ana"
        assert user.access_token == "tok"

    def test_sign_in_rejected(self, client, sdk):
        """Test that SDK errors become AuthenticationError."""
        sdk.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            IdentityGateway(client).sign_in("ana@example.com", "wrong")

    def test_sign_in_without_user(self, client, sdk):
        """Test a response with no user."""
        sdk.auth.sign_in_with_password.return_value = SimpleNamespace(user=None, session=None)
        with pytest.raises(AuthenticationError):
            IdentityGateway(client).sign_in("ana@example.com", "secret")

    def test_sign_up_sends_metadata_and_profile(self, client, sdk):
        """Test that sign-up carries metadata and inserts the profile row."""
        sdk.auth.sign_up.return_value = _auth_response(user_id="new-user")
        profiles = RecordingProfileStorage()

        user = IdentityGateway(client, profile_storage=profiles).sign_up(
            "ana@example.com", "secret", _profile(),
        )

        payload = sdk.auth.sign_up.call_args.args[0]
        assert payload["email"] == "ana@example.com"
        assert payload["options"]["data"]["renda_total"] == 3000.0
        assert payload["options"]["data"]["dia_pagamento_2"] == 0
        assert user.user_id == "new-user"
        assert profiles.profiles[0].id == "new-user"

    def test_sign_up_without_user_skips_profile(self, client, sdk):
        """Test that no profile row is written when no user was created."""
        sdk.auth.sign_up.return_value = SimpleNamespace(user=None, session=None)
        profiles = RecordingProfileStorage()

        result = IdentityGateway(client, profile_storage=profiles).sign_up(
            "ana@example.com", "secret", _profile(),
        )

        assert result is None
        assert profiles.profiles == []

    def test_sign_up_profile_failure(self, client, sdk):
        """Test that a failed profile insert is reported."""
        sdk.auth.sign_up.return_value = _auth_response()
        gateway = IdentityGateway(client, profile_storage=RecordingProfileStorage(fail=True))
        with pytest.raises(AuthenticationError, match="duplicate key"):
            gateway.sign_up("ana@example.com", "secret", _profile())

    def test_default_profile_storage_uses_users_table(self, client, sdk):
        """Test that the profile row goes to the users table by default."""
        sdk.auth.sign_up.return_value = _auth_response(user_id="new-user")
        IdentityGateway(client).sign_up("ana@example.com", "secret", _profile())

        sdk.table.assert_called_with("users")
        row = sdk.table.return_value.insert.call_args.args[0]
        assert row["id"] == "new-user"
        assert row["email"] == "ana@example.com"

    def test_sign_out_errors_are_swallowed(self, client, sdk):
        """Test that a failed remote sign-out does not raise."""
        sdk.auth.sign_out.side_effect = Exception("network")
        IdentityGateway(client).sign_out()
        sdk.auth.sign_out.assert_called_once()

    def test_current_session(self, client, sdk):
        """Test restoring a persisted session."""
        sdk.auth.get_session.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-1", email="ana@example.com", user_metadata={}),
            access_token="tok",
        )
        user = IdentityGateway(client).current_session()
        assert user.user_id == "user-1"
        assert user.display_name == "ana"

    def test_current_session_none(self, client, sdk):
        """Test that no persisted session yields None."""
        sdk.auth.get_session.return_value = None
        assert IdentityGateway(client).current_session() is None

    def test_current_session_error(self, client, sdk):
        """Test that a session lookup failure yields None."""
        sdk.auth.get_session.side_effect = Exception("expired")
        assert IdentityGateway(client).current_session() is None
