# =============================================================================
# tests/test_database.py - Startup Sequence Tests
# =============================================================================
# Tests for the primary -> in-memory -> abort connection sequence, using
# fake clients and a fake in-memory server instead of a real mongod.
# =============================================================================

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from app import main as app_main
from lib.database import (
    ConnectionState,
    Connected,
    DatabaseConnector,
    DatabaseSource,
    Failed,
    close_connection,
)

PRIMARY_URI = "mongodb://localhost:27017/adaptive_fitness"
MEMORY_URI = "mongodb://127.0.0.1:27999/"


# =============================================================================
# Fakes
# =============================================================================

class FakeAdmin:
    def __init__(self, error):
        self.error = error

    async def command(self, name):
        if self.error:
            raise self.error
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, uri, error=None, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.admin = FakeAdmin(error)
        self.closed = False
        self.default_requested = None
        self._backend = AsyncMongoMockClient()

    async def close(self):
        self.closed = True

    def get_default_database(self, default=None):
        self.default_requested = default
        return self._backend[default]


def make_client_factory(*failing_uris):
    created = []

    def factory(uri, **kwargs):
        error = ServerSelectionTimeoutError(f"{uri} unreachable") if uri in failing_uris else None
        client = FakeClient(uri, error=error, **kwargs)
        created.append(client)
        return client

    factory.created = created
    return factory


class FakeMemoryServer:
    connection_string = MEMORY_URI

    def __init__(self, fail=False):
        self.fail = fail
        self.started = False
        self.stopped = False

    def start(self):
        if self.fail:
            raise RuntimeError("mongod binary unavailable")
        self.started = True

    def stop(self):
        self.stopped = True


def make_connector(client_factory, memory_server):
    return DatabaseConnector(
        PRIMARY_URI,
        client_factory=client_factory,
        memory_server_factory=lambda: memory_server,
    )


# =============================================================================
# DatabaseConnector
# =============================================================================

class TestDatabaseConnector:
    """Tests for the connection state machine."""

    def test_primary_success(self):
        """Test that a reachable primary is used directly."""
        factory = make_client_factory()
        memory = FakeMemoryServer()
        connector = make_connector(factory, memory)

        result = asyncio.run(connector.connect())

        assert isinstance(result, Connected)
        assert result.source == DatabaseSource.PRIMARY
        assert result.memory_server is None
        assert connector.state == ConnectionState.CONNECTED
        assert [c.uri for c in factory.created] == [PRIMARY_URI]
        assert memory.started is False

    def test_uses_default_database_name(self):
        factory = make_client_factory()
        connector = DatabaseConnector(
            PRIMARY_URI,
            default_db_name="fitness_dev",
            client_factory=factory,
            memory_server_factory=FakeMemoryServer,
        )

        result = asyncio.run(connector.connect())

        assert isinstance(result, Connected)
        assert factory.created[0].default_requested == "fitness_dev"

    def test_fallback_to_in_memory(self, caplog):
        """Test that an unreachable primary falls back to the in-memory server."""
        caplog.set_level(logging.INFO, logger="lib.database")
        factory = make_client_factory(PRIMARY_URI)
        memory = FakeMemoryServer()
        connector = make_connector(factory, memory)

        result = asyncio.run(connector.connect())

        assert isinstance(result, Connected)
        assert result.source == DatabaseSource.IN_MEMORY
        assert result.memory_server is memory
        assert memory.started is True
        assert connector.state == ConnectionState.CONNECTED
        assert [c.uri for c in factory.created] == [PRIMARY_URI, MEMORY_URI]
        assert factory.created[0].closed is True
        assert "attempting to start in-memory database" in caplog.text
        assert "In-memory MongoDB started and connected" in caplog.text

    def test_fallback_server_fails_to_start(self):
        """Test that a fallback that can't start aborts the sequence."""
        factory = make_client_factory(PRIMARY_URI)
        memory = FakeMemoryServer(fail=True)
        connector = make_connector(factory, memory)

        result = asyncio.run(connector.connect())

        assert isinstance(result, Failed)
        assert "mongod binary unavailable" in result.reason
        assert connector.state == ConnectionState.ABORTED

    def test_fallback_unreachable(self):
        """Test that an unreachable fallback aborts and stops the server."""
        factory = make_client_factory(PRIMARY_URI, MEMORY_URI)
        memory = FakeMemoryServer()
        connector = make_connector(factory, memory)

        result = asyncio.run(connector.connect())

        assert isinstance(result, Failed)
        assert "unreachable" in result.reason
        assert memory.stopped is True

    def test_primary_never_raises(self):
        """Test that connect() reports failure instead of raising."""
        def exploding_factory(uri, **kwargs):
            raise ValueError("bad uri")

        connector = DatabaseConnector(
            "not-a-uri",
            client_factory=exploding_factory,
            memory_server_factory=lambda: FakeMemoryServer(fail=True),
        )

        assert isinstance(asyncio.run(connector.connect()), Failed)

    def test_close_stops_memory_server(self):
        factory = make_client_factory(PRIMARY_URI)
        memory = FakeMemoryServer()
        result = asyncio.run(make_connector(factory, memory).connect())

        asyncio.run(close_connection(result))

        assert factory.created[-1].closed is True
        assert memory.stopped is True


# =============================================================================
# Server Entry Point
# =============================================================================

class TestServe:
    """Tests for app.main.serve and main."""

    def test_exits_before_binding_when_no_database(self, test_settings):
        """Test that total failure returns 1 without creating a server."""
        connector = make_connector(
            make_client_factory(PRIMARY_URI),
            FakeMemoryServer(fail=True),
        )

        with patch.object(app_main.uvicorn, "Server") as server_cls:
            exit_code = asyncio.run(app_main.serve(test_settings, connector))

        assert exit_code == 1
        server_cls.assert_not_called()

    def test_serves_on_fallback(self, test_settings):
        """Test that the server starts on the in-memory database."""
        factory = make_client_factory(PRIMARY_URI)
        memory = FakeMemoryServer()
        connector = make_connector(factory, memory)
        server = MagicMock()
        server.serve = AsyncMock()

        with patch.object(app_main.uvicorn, "Server", return_value=server), \
                patch.object(app_main.uvicorn, "Config") as config_cls:
            exit_code = asyncio.run(app_main.serve(test_settings, connector))

        assert exit_code == 0
        server.serve.assert_awaited_once()
        assert config_cls.call_args.kwargs["port"] == 5000
        assert memory.stopped is True

    def test_main_exits_nonzero(self):
        """Test that main() turns a failed startup into SystemExit(1)."""
        with patch.object(app_main, "serve", AsyncMock(return_value=1)):
            with pytest.raises(SystemExit) as exc_info:
                app_main.main()

        assert exc_info.value.code == 1

    def test_main_clean_exit(self):
        with patch.object(app_main, "serve", AsyncMock(return_value=0)):
            app_main.main()


class TestLifespan:
    """Tests for the `uvicorn app.main:app` startup path."""

    def test_aborts_when_no_database(self):
        """Test that a total failure raises SystemExit(1) before serving."""
        app = app_main.create_app()

        async def start():
            with pytest.raises(SystemExit) as exc_info:
                async with app_main.lifespan(app):
                    pass
            return exc_info

        with patch.object(app_main, "connect_database", AsyncMock(return_value=Failed("unreachable"))):
            exc_info = asyncio.run(start())

        assert exc_info.value.code == 1
        assert app.state.context is None

    def test_connects_and_closes(self, caplog):
        """Test that the context is set on startup and the connection closed on exit."""
        caplog.set_level(logging.INFO, logger="app.main")
        app = app_main.create_app()
        connection = Connected(
            client=MagicMock(),
            database=AsyncMongoMockClient()["adaptive_fitness_test"],
            source=DatabaseSource.PRIMARY,
        )
        closer = AsyncMock()

        async def run():
            async with app_main.lifespan(app):
                assert app.state.context.database is connection.database
                closer.assert_not_awaited()

        with patch.object(app_main, "connect_database", AsyncMock(return_value=connection)), \
                patch.object(app_main, "close_connection", closer):
            asyncio.run(run())

        closer.assert_awaited_once_with(connection)
        assert "Starting Adaptive Fitness API in development mode" in caplog.text

    def test_prebuilt_context_skips_connect(self, test_settings, database):
        """Test that an app built with a context doesn't connect again."""
        app = app_main.create_app(app_main.AppContext(settings=test_settings, database=database))
        connect = AsyncMock()

        async def run():
            async with app_main.lifespan(app):
                pass

        with patch.object(app_main, "connect_database", connect):
            asyncio.run(run())

        connect.assert_not_awaited()
