import signal

import pytest

from api.server import GracefulServer, build_config, main, parse_listen_addr
from core.settings import Settings
from infra.resources import Lifecycle, LifecycleState


@pytest.mark.parametrize(
    "addr, expected",
    [
        (":8080", ("0.0.0.0", 8080)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::1]:8081", ("::1", 8081)),
    ],
)
def test_parse_listen_addr_check(addr, expected):
    assert parse_listen_addr(addr) == expected


@pytest.mark.parametrize("addr", ["8080", "localhost:", "host:http"])
def test_parse_listen_addr_rejects_check(addr):
    with pytest.raises(ValueError):
        parse_listen_addr(addr)


def test_build_config_timeouts_check(app):
    config = build_config(app, "127.0.0.1", 8080, Settings())

    assert config.timeout_keep_alive == 15
    assert config.timeout_graceful_shutdown == 30
    assert config.access_log is False


def test_signal_clears_readiness_before_exit_check(app):
    lifecycle = Lifecycle()
    lifecycle.mark_ready()
    server = GracefulServer(build_config(app, "127.0.0.1", 8080, Settings()), lifecycle)

    server.handle_exit(signal.SIGTERM, None)

    assert not lifecycle.is_ready()
    assert lifecycle.state is LifecycleState.DRAINING
    assert server.should_exit


def test_main_rejects_bad_listen_addr_check():
    with pytest.raises(SystemExit) as exc:
        main(["--listen-addr", "not-an-address"])

    assert exc.value.code == 2
