import argparse
import unittest
from unittest import mock

import pytest

from todotask.interfaces import cli


def _env(policy: str = "max_plus_one", seconds: str = "2.0") -> dict[str, str]:
    return {"ID_POLICY": policy, "NOTICE_SECONDS": seconds}


class TestResolveArgs(unittest.TestCase):
    def test_defaults_from_env(self) -> None:
        args = cli.build_parser().parse_args([])
        args = cli.resolve_args(args, _env("counter", "1.5"))
        assert args.id_policy == "counter"
        assert args.notice_seconds == 1.5
        assert args.debug is False

    def test_flags_win(self) -> None:
        args = cli.build_parser().parse_args(["--id-policy", "counter", "--notice-seconds", "4"])
        args = cli.resolve_args(args, _env())
        assert args.id_policy == "counter"
        assert args.notice_seconds == 4.0

    def test_bad_policy(self) -> None:
        args = cli.build_parser().parse_args(["--id-policy", "random"])
        with pytest.raises(ValueError, match="Unknown ID policy"):
            cli.resolve_args(args, _env())

    def test_bad_seconds(self) -> None:
        args = cli.build_parser().parse_args(["--notice-seconds", "0"])
        with pytest.raises(ValueError, match="positive"):
            cli.resolve_args(args, _env())


class TestMain(unittest.TestCase):
    def test_runs_tui_with_resolved_args(self) -> None:
        with (
            mock.patch.object(cli, "load_env", return_value=_env()),
            mock.patch.object(cli.endpoint, "run", return_value=0) as run,
        ):
            assert cli.main(["--id-policy", "counter"]) == 0
        (args,) = run.call_args.args
        assert isinstance(args, argparse.Namespace)
        assert args.id_policy == "counter"

    def test_invalid_config_returns_2(self) -> None:
        with (
            mock.patch.object(cli, "load_env", side_effect=ValueError("Invalid ID_POLICY: x")),
            mock.patch.object(cli.endpoint, "run") as run,
            self.assertLogs("todotask", level="ERROR"),
        ):
            assert cli.main([]) == 2
        run.assert_not_called()


if __name__ == "__main__":
    unittest.main()
