"""Tests for ``perch run``."""

from unittest.mock import patch

import pytest

from perch.cli import main


class TestRunCommand:
    def test_uses_app_config(self, fake_module) -> None:
        with patch("perch.server.serve.run_server") as serve:
            main(["run", "fake_perch_app:app"])
        serve.assert_called_once_with(
            fake_module.app,
            "127.0.0.1",
            8000,
            log_level="info",
            reload=False,
            app_path="fake_perch_app:app",
        )

    def test_flags_override_config(self, fake_module) -> None:
        with patch("perch.server.serve.run_server") as serve:
            main(
                [
                    "run",
                    "fake_perch_app:app",
                    "--host",
                    "0.0.0.0",
                    "--port",
                    "9000",
                    "--log-level",
                    "debug",
                    "--reload",
                ]
            )
        args, kwargs = serve.call_args
        assert args[1:] == ("0.0.0.0", 9000)
        assert kwargs["log_level"] == "debug"
        assert kwargs["reload"] is True

    def test_explicit_port_zero_is_kept(self, fake_module) -> None:
        with patch("perch.server.serve.run_server") as serve:
            main(["run", "fake_perch_app:app", "--port", "0"])
        args, _ = serve.call_args
        assert args[2] == 0

    def test_bad_import_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("perch.server.serve.run_server") as serve:
            with pytest.raises(SystemExit) as exc_info:
                main(["run", "no_such_module_for_perch:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        serve.assert_not_called()


class TestServe:
    def test_passes_live_app_to_uvicorn(self, fake_module) -> None:
        from perch.server.serve import run_server

        with patch("uvicorn.run") as uv_run:
            run_server(fake_module.app, "127.0.0.1", 8001)
        args, kwargs = uv_run.call_args
        assert args[0] is fake_module.app
        assert kwargs["port"] == 8001
        assert kwargs["reload"] is False
        assert kwargs["access_log"] is False

    def test_reload_uses_import_string(self, fake_module) -> None:
        from perch.server.serve import run_server

        with patch("uvicorn.run") as uv_run:
            run_server(
                fake_module.app,
                "127.0.0.1",
                8001,
                reload=True,
                app_path="fake_perch_app:app",
            )
        args, kwargs = uv_run.call_args
        assert args[0] == "fake_perch_app:app"
        assert kwargs["reload"] is True

    def test_reload_without_import_string_is_disabled(
        self, fake_module, caplog: pytest.LogCaptureFixture
    ) -> None:
        from perch.server.serve import run_server

        with patch("uvicorn.run") as uv_run:
            run_server(fake_module.app, "127.0.0.1", 8001, reload=True)
        assert uv_run.call_args.kwargs["reload"] is False
        assert any("Reload requested" in m for m in caplog.messages)

    def test_app_run_delegates(self, fake_module) -> None:
        with patch("perch.server.serve.run_server") as serve:
            fake_module.app.run(port=8123)
        serve.assert_called_once_with(fake_module.app, "127.0.0.1", 8123, log_level="info")

    def test_app_run_keeps_port_zero(self, fake_module) -> None:
        with patch("perch.server.serve.run_server") as serve:
            fake_module.app.run(port=0)
        serve.assert_called_once_with(fake_module.app, "127.0.0.1", 0, log_level="info")
