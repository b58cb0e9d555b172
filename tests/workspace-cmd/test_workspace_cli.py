"""CLI tests for my-toolkit workspace subcommands."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from fake_git_client import FakeGitClient
from fake_tool_runner import FakeToolRunner

from my_toolkit.cli import main
from my_toolkit.workspace.manifest import LocalRepository, WorkspaceManifest


def _invoke(*args, **kwargs):
    return CliRunner().invoke(main, list(args), **kwargs)


def _init_workspace(path, org="acme"):
    WorkspaceManifest.new(str(path / "WORKSPACE"), "ws").save()
    (path / "CONFIG").write_text(f"ORG={org}\n")


@pytest.mark.unit
class TestWorkspaceCommandsRegistered:

    @pytest.mark.parametrize("command", ["create", "add", "build"])
    def test_listed_in_workspace_help(self, command):
        result = _invoke("workspace", "--help")
        assert result.exit_code == 0
        assert command in result.output

    def test_create_requires_path(self):
        result = _invoke("workspace", "create")
        assert result.exit_code == 1

    def test_add_requires_a_project(self):
        result = _invoke("workspace", "add")
        assert result.exit_code == 1
        assert "-p" in result.output


@pytest.mark.unit
class TestCreateCommand:

    def test_passes_path_and_org(self, tmp_path):
        with patch("my_toolkit.workspace.cli.create_workspace") as mock_fn:
            result = _invoke("workspace", "create", str(tmp_path / "ws"), "--org", "acme")

        assert result.exit_code == 0
        assert mock_fn.call_args[0][:2] == (str(tmp_path / "ws"), "acme")

    def test_org_falls_back_to_environment(self, tmp_path):
        with patch("my_toolkit.workspace.cli.create_workspace") as mock_fn:
            _invoke("workspace", "create", str(tmp_path / "ws"), env={"MY_TOOLKIT_ORG": "envorg"})

        assert mock_fn.call_args[0][1] == "envorg"

    def test_prompts_for_org_when_config_missing(self, tmp_path):
        with patch("my_toolkit.workspace.cli.create_workspace") as mock_fn:
            _invoke(
                "workspace", "create", str(tmp_path / "ws"),
                input="prompted\n", env={"MY_TOOLKIT_ORG": ""},
            )

        assert mock_fn.call_args[0][1] == "prompted"

    def test_does_not_prompt_when_config_exists(self, tmp_path):
        (tmp_path / "CONFIG").write_text("ORG=acme\n")
        with patch("my_toolkit.workspace.cli.create_workspace") as mock_fn:
            result = _invoke("workspace", "create", str(tmp_path), env={"MY_TOOLKIT_ORG": ""})

        assert result.exit_code == 0
        assert not mock_fn.call_args[0][1]

    def test_creates_workspace_end_to_end(self, tmp_path):
        with patch("my_toolkit.workspace.preflight.shutil.which", return_value="/usr/bin/bazel"):
            result = _invoke("workspace", "create", str(tmp_path / "ws"), "--org", "acme")

        assert result.exit_code == 0, result.output
        assert (tmp_path / "ws" / "WORKSPACE").is_file()
        assert (tmp_path / "ws" / "CONFIG").read_text() == "ORG=acme\n"

    def test_running_twice_succeeds_and_reports_skips(self, tmp_path):
        with patch("my_toolkit.workspace.preflight.shutil.which", return_value="/usr/bin/bazel"):
            _invoke("workspace", "create", str(tmp_path / "ws"), "--org", "acme")
            result = _invoke("workspace", "create", str(tmp_path / "ws"), "--org", "acme")

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_path_that_is_a_file_exits_1_with_message(self, tmp_path):
        (tmp_path / "ws").write_text("")
        with patch("my_toolkit.workspace.preflight.shutil.which", return_value="/usr/bin/bazel"):
            result = _invoke("workspace", "create", str(tmp_path / "ws"), "--org", "acme")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "exists and is not a directory" in result.output


@pytest.mark.unit
class TestAddCommand:

    def _add(self, tmp_path, monkeypatch, *args, git_client=None):
        monkeypatch.chdir(tmp_path)
        git_client = git_client or FakeGitClient()
        with patch("my_toolkit.workspace.cli.GitClient", return_value=git_client):
            result = _invoke("workspace", "add", *args)
        return result, git_client

    def test_clones_and_references_in_order(self, tmp_path, monkeypatch):
        _init_workspace(tmp_path)

        result, git_client = self._add(tmp_path, monkeypatch, "-p", "orgA/repo1", "-p", "orgA/repo2")

        assert result.exit_code == 0, result.output
        assert [call[1] for call in git_client.clone_calls] == [
            "https://github.com/orgA/repo1.git",
            "https://github.com/orgA/repo2.git",
        ]
        manifest = WorkspaceManifest.load(str(tmp_path / "WORKSPACE"))
        assert manifest.local_repositories == [
            LocalRepository("repo1", "repo1"),
            LocalRepository("repo2", "repo2"),
        ]

    def test_git_base_url_option(self, tmp_path, monkeypatch):
        _init_workspace(tmp_path)

        _, git_client = self._add(
            tmp_path, monkeypatch, "-p", "orgA/repo1", "--git-base-url", "https://git.example.com",
        )

        assert git_client.clone_calls[0][1] == "https://git.example.com/orgA/repo1.git"

    def test_outside_workspace_is_fatal(self, tmp_path, monkeypatch):
        result, git_client = self._add(tmp_path, monkeypatch, "-p", "orgA/repo1")

        assert result.exit_code == 1
        assert "No WORKSPACE file" in result.output
        assert git_client.calls == []

    def test_existing_directory_is_not_cloned(self, tmp_path, monkeypatch):
        _init_workspace(tmp_path)
        (tmp_path / "repo1").mkdir()

        result, git_client = self._add(tmp_path, monkeypatch, "-p", "orgA/repo1")

        assert result.exit_code == 0
        assert git_client.clone_calls == []

    def test_clone_failure_exits_1(self, tmp_path, monkeypatch):
        _init_workspace(tmp_path)
        git_client = FakeGitClient()
        git_client.fail_clone("repo1")

        result, _ = self._add(tmp_path, monkeypatch, "-p", "orgA/repo1", git_client=git_client)

        assert result.exit_code == 1


@pytest.mark.unit
class TestBuildCommand:

    def _build(self, cwd, monkeypatch, *args, runner=None):
        monkeypatch.chdir(cwd)
        runner = runner or FakeToolRunner()
        with patch("my_toolkit.workspace.cli.ToolRunner", return_value=runner):
            result = _invoke("workspace", "build", *args)
        return result, runner

    def test_dash_all_builds_everything(self, tmp_path, monkeypatch):
        runner = FakeToolRunner()
        runner.respond(["bazel", "info"], stdout=f"{tmp_path}\n")

        result, _ = self._build(tmp_path, monkeypatch, "-all", runner=runner)

        assert result.exit_code == 0, result.output
        assert runner.commands[-1] == ["bazel", "build", "//..."]

    def test_named_targets_are_passed_through(self, tmp_path, monkeypatch):
        runner = FakeToolRunner()
        runner.respond(["bazel", "info"], stdout=f"{tmp_path}\n")
        runner.respond(["bazel", "query"], stdout="//billing:billing\n")

        result, _ = self._build(tmp_path, monkeypatch, "billing", runner=runner)

        assert result.exit_code == 0, result.output
        assert runner.commands[-1] == ["bazel", "build", "//billing/..."]

    def test_no_descriptor_outside_workspace_exits_1_without_building(self, tmp_path, monkeypatch):
        runner = FakeToolRunner()
        runner.respond(["bazel", "info"], returncode=1)

        result, _ = self._build(tmp_path, monkeypatch, runner=runner)

        assert result.exit_code == 1
        assert runner.commands_starting_with("bazel", "build") == []

    def test_all_mixed_with_names_is_usage_error(self, tmp_path, monkeypatch):
        result, runner = self._build(tmp_path, monkeypatch, "-all", "billing")

        assert result.exit_code == 1
        assert runner.commands == []

    def test_verbose_flag_reaches_runner(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("my_toolkit.workspace.cli.ToolRunner") as runner_cls:
            CliRunner().invoke(main, ["--verbose", "workspace", "build", "-all"])

        runner_cls.assert_called_once_with(verbose=True)
