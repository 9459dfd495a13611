"""Tests for submission settings loading."""

import pytest

from proposal_desk.errors import SettingsError
from proposal_desk.settings import MB, SubmissionSettings

ENV_KEYS = (
    "PROPOSAL_DESK_API_URL",
    "PROPOSAL_DESK_TOKEN",
    "PROPOSAL_DESK_MAX_ATTACHMENTS",
    "PROPOSAL_DESK_MAX_ATTACHMENT_MB",
    "PROPOSAL_DESK_MAX_ATTACHMENT_BYTES",
    "PROPOSAL_DESK_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with no PROPOSAL_DESK_* variables set."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestDefaults:
    """Tests for built-in defaults and the attachment size fields."""

    def test_defaults(self, clean_env) -> None:
        """Unconfigured settings point at localhost with 3 files of 10 MB."""
        s = SubmissionSettings()
        assert s.api_url == "http://localhost:4000"
        assert s.token is None
        assert s.max_attachments == 3
        assert s.max_attachment_bytes == 10 * MB
        assert s.max_attachment_mb == 10
        assert s.timeout == 30.0

    def test_megabytes_derive_bytes(self, clean_env) -> None:
        """max_attachment_mb wins over max_attachment_bytes."""
        s = SubmissionSettings(max_attachment_mb=4, max_attachment_bytes=1)
        assert s.max_attachment_bytes == 4 * MB

    def test_bytes_derive_megabytes(self, clean_env) -> None:
        """Without an MB value the MB figure is derived from bytes."""
        assert SubmissionSettings(max_attachment_bytes=2 * MB).max_attachment_mb == 2

    def test_arguments_override_environment(self, clean_env) -> None:
        """Explicit keyword arguments take precedence over the environment."""
        clean_env.setenv("PROPOSAL_DESK_TOKEN", "from-env")
        assert SubmissionSettings(token="explicit").token == "explicit"


class TestFromEnv:
    """Tests for SubmissionSettings.from_env."""

    def test_unset_keeps_defaults(self, clean_env) -> None:
        """No variables means default values."""
        s = SubmissionSettings.from_env()
        assert s.api_url == "http://localhost:4000"
        assert s.max_attachment_bytes == 10 * MB

    def test_reads_variables(self, clean_env) -> None:
        """Every PROPOSAL_DESK_* variable maps onto its field."""
        clean_env.setenv("PROPOSAL_DESK_API_URL", "https://api.example.test")
        clean_env.setenv("PROPOSAL_DESK_TOKEN", " tok ")
        clean_env.setenv("PROPOSAL_DESK_MAX_ATTACHMENTS", "5")
        clean_env.setenv("PROPOSAL_DESK_MAX_ATTACHMENT_MB", "25")
        clean_env.setenv("PROPOSAL_DESK_TIMEOUT", "12.5")
        s = SubmissionSettings.from_env()
        assert s.api_url == "https://api.example.test"
        assert s.token == "tok"
        assert s.max_attachments == 5
        assert s.max_attachment_bytes == 25 * MB
        assert s.timeout == 12.5

    def test_bad_megabytes(self, clean_env) -> None:
        """A non-integer MB limit is a SettingsError naming the field."""
        clean_env.setenv("PROPOSAL_DESK_MAX_ATTACHMENT_MB", "ten")
        with pytest.raises(SettingsError, match="max_attachment_mb"):
            SubmissionSettings.from_env()

    def test_bad_value(self, clean_env) -> None:
        """Out-of-range values are reported as SettingsError."""
        clean_env.setenv("PROPOSAL_DESK_MAX_ATTACHMENTS", "-1")
        with pytest.raises(SettingsError):
            SubmissionSettings.from_env()


class TestFromYaml:
    """Tests for SubmissionSettings.from_yaml."""

    def test_nested(self, clean_env, tmp_path) -> None:
        """Values under a submission: section are loaded."""
        path = tmp_path / "desk.yaml"
        path.write_text(
            "submission:\n"
            "  api_url: https://api.example.test\n"
            "  max_attachments: 2\n"
            "  max_attachment_mb: 4\n"
        )
        s = SubmissionSettings.from_yaml(path)
        assert s.api_url == "https://api.example.test"
        assert s.max_attachments == 2
        assert s.max_attachment_mb == 4
        assert s.max_attachment_bytes == 4 * MB

    def test_flat_ignores_unknown_keys(self, clean_env, tmp_path) -> None:
        """A flat file works and unrelated keys are skipped."""
        path = tmp_path / "desk.yaml"
        path.write_text("token: abc\ntheme: dark\n")
        s = SubmissionSettings.from_yaml(path)
        assert s.token == "abc"
        assert s.max_attachments == 3

    def test_empty_file(self, clean_env, tmp_path) -> None:
        """An empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert SubmissionSettings.from_yaml(path) == SubmissionSettings()

    def test_invalid(self, clean_env, tmp_path) -> None:
        """Validation failures name the file."""
        path = tmp_path / "bad.yaml"
        path.write_text("timeout: 0\n")
        with pytest.raises(SettingsError, match="bad.yaml"):
            SubmissionSettings.from_yaml(path)

    @pytest.mark.parametrize(
        "content",
        ["submission:\n", "- api_url\n- token\n", "just a string\n", "submission: [1, 2]\n"],
    )
    def test_wrong_shape(self, clean_env, tmp_path, content) -> None:
        """Non-mapping documents or sections raise SettingsError, not AttributeError."""
        path = tmp_path / "shape.yaml"
        path.write_text(content)
        with pytest.raises(SettingsError):
            SubmissionSettings.from_yaml(path)

    def test_unparseable(self, clean_env, tmp_path) -> None:
        """Broken YAML syntax is reported as SettingsError."""
        path = tmp_path / "broken.yaml"
        path.write_text("submission: [unclosed\n")
        with pytest.raises(SettingsError, match="Could not parse"):
            SubmissionSettings.from_yaml(path)
