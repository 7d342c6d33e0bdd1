"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from kubedump import cli
from kubedump.controllers.discovery import (
    DiscoveryController,
    DiscoveryResult,
    DiscoveryUnavailableError,
    PartialDiscoveryError,
)
from kubedump.controllers.discovery.fetchers import Catalog
from kubedump.dumpers import DirDumper, StreamDumper


@pytest.fixture(autouse=True)
def no_logging_setup() -> Any:
    with patch.object(cli, "configure_logging") as configure:
        yield configure


class TestResolveSettings:
    """Tests for merging flags and config files."""

    def test_flags(self) -> None:
        args = cli.build_parser().parse_args(
            [
                "--chunk-size", "5",
                "--must-exist", "namespaces",
                "--must-exist", "clusterroles.rbac.authorization.k8s.io",
                "--ignore", r"roles\.rbac\.authorization\.k8s\.io",
                "--context", "kind-kind",
                "--timeout", "60",
            ]
        )

        options, transport = cli.resolve_settings(args)

        assert options.page_size == 5
        assert options.must_exist_resources == [
            "namespaces",
            "clusterroles.rbac.authorization.k8s.io",
        ]
        assert options.ignore_resources == [r"roles\.rbac\.authorization\.k8s\.io"]
        assert options.timeout_seconds == 60
        assert transport == {"context": "kind-kind", "kubectl": "kubectl"}

    def test_config_file_merged_with_flags(self, tmp_path: Path) -> None:
        config = tmp_path / "kubedump.yaml"
        config.write_text(
            "page_size: 100\nignore: [events]\ncontext: from-file\nkubectl: /bin/kc\n"
        )
        args = cli.build_parser().parse_args(
            ["--config", str(config), "--ignore", "secrets", "--chunk-size", "7"]
        )

        options, transport = cli.resolve_settings(args)

        assert options.page_size == 7
        assert options.ignore_resources == ["events", "secrets"]
        assert transport == {"context": "from-file", "kubectl": "/bin/kc"}

    def test_invalid_chunk_size(self) -> None:
        args = cli.build_parser().parse_args(["--chunk-size", "0"])
        with pytest.raises(cli.ConfigError):
            cli.resolve_settings(args)


class TestMain:
    """Tests for cli.main."""

    def test_invalid_regex_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--ignore", "roles("]) == cli.EXIT_USAGE
        assert "invalid configuration" in capsys.readouterr().err

    def test_success_streams_to_stdout(
        self, rbac_cluster: Any, run_kubectl: Any, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("kubedump.cli.DiscoveryController") as controller_cls:
            def build(sink: Any, options: Any, **transport: Any) -> DiscoveryController:
                assert isinstance(sink, StreamDumper)
                assert transport == {"context": None, "kubectl": "kubectl"}
                return DiscoveryController(sink, options, run_kubectl_func=run_kubectl)

            controller_cls.side_effect = build
            exit_code = cli.main(["--chunk-size", "5"])

        assert exit_code == cli.EXIT_OK
        captured = capsys.readouterr()
        records = [json.loads(line) for line in captured.out.splitlines()]
        assert [r["kind"] for r in records] == [
            "NamespaceList",
            "ServiceAccountList",
            "ServiceAccountList",
            "ClusterRoleList",
            "RoleList",
        ]
        assert "Discovered resources:" in captured.err

    def test_dir_output(self, rbac_cluster: Any, run_kubectl: Any, tmp_path: Path) -> None:
        out = tmp_path / "dump"
        with patch("kubedump.cli.DiscoveryController") as controller_cls:
            def build(sink: Any, options: Any, **transport: Any) -> DiscoveryController:
                assert isinstance(sink, DirDumper)
                return DiscoveryController(sink, options, run_kubectl_func=run_kubectl)

            controller_cls.side_effect = build
            exit_code = cli.main(["--dir", str(out)])

        assert exit_code == cli.EXIT_OK
        lines = (out / "objects-ServiceAccount.json").read_text().splitlines()
        assert len(lines) == 10
        assert (out / "split" / "test-ns" / "Role.rbac.authorization.k8s.io.json").exists()

    @pytest.mark.parametrize(
        "error",
        [
            DiscoveryUnavailableError("failed to get server preferred resources: refused"),
            PartialDiscoveryError([]),
        ],
    )
    def test_failures_exit_non_zero(
        self, error: Exception, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("kubedump.cli.DiscoveryController") as controller_cls:
            controller_cls.return_value.discover_objects.side_effect = error
            assert cli.main([]) == cli.EXIT_FAILURE
        assert "failed to dump some or all objects" in capsys.readouterr().err

    def test_empty_cluster_succeeds(self) -> None:
        result = DiscoveryResult(catalog=Catalog())
        with patch("kubedump.cli.DiscoveryController"):
            with patch("kubedump.cli.asyncio.run", return_value=result):
                assert cli.main([]) == cli.EXIT_OK
