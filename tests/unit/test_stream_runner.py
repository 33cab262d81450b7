"""Tests for the stream runner entry point"""
import json

import pytest
from websockets.exceptions import ConnectionClosedOK

from config_loader import StreamConfig
from core.errors import ConnectionFailedError
from interfaces.events import EventKind
from monitoring import logs_listener
from stream_runner import main, parse_args, run_stream

from conftest import event_line


def test_parse_args():
    args = parse_args(["--config", "stream.yaml", "--program", "A", "--program", "B"])
    assert args.config == "stream.yaml"
    assert args.programs == ["A", "B"]
    assert args.log_file is None


def test_main_reports_bad_config(tmp_path, capsys):
    path = tmp_path / "stream.yaml"
    path.write_text("commitment: recent\n")
    assert main(["--config", str(path)]) == 2
    assert "Config error" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_failed_subscription_does_not_stop_others(recording_handler, signature_text, monkeypatch):
    good = [
        json.dumps({"result": 9}),
        json.dumps({
            "method": "logsNotification",
            "params": {"result": {
                "context": {"slot": 1},
                "value": {"signature": signature_text, "err": None, "logs": [event_line(EventKind.COMPLETE)]},
            }},
        }),
    ]
    calls = []

    class OneShotWebSocket:
        async def send(self, message):
            pass

        async def recv(self):
            if good:
                return good.pop(0)
            raise ConnectionClosedOK(None, None)

        async def close(self):
            pass

    async def fake_connect(url, **kwargs):
        calls.append(url)
        if len(calls) == 1:
            raise ConnectionFailedError("refused")
        return OneShotWebSocket()

    monkeypatch.setattr(logs_listener.websockets, "connect", fake_connect)
    await run_stream(StreamConfig(), recording_handler)

    assert len(calls) == 2
    assert recording_handler.methods == ["on_complete_event"]
