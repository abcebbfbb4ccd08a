from dataclasses import dataclass, field
from typing import Optional

import pytest

from cds_constructs.lib.config import (
    CdsConfigException,
    HierarchicalConfig,
    StackConfigError,
    get_stack_config,
    tag_prefix,
)
from cds_constructs.lib.config import mapper
from cds_constructs.lib.iam import SSEAlgorithm
from cds_constructs.lib.tags import get_tags
from cds_constructs.modules.aws.s3.config import S3Args


@pytest.fixture
def project(tmp_path):
    """
    project/                 (git root, inside tmp_path)
    ├── Cds.common.yaml
    └── sysenvs
        └── example
            ├── Cds.common.yaml
            └── __main__.py
    """
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / "Cds.common.yaml").write_text("tag_namespace: acme\nteam: platform\nlog_prefix: logs/\n")

    sysenv = root / "sysenvs" / "example"
    sysenv.mkdir(parents=True)
    (sysenv / "Cds.common.yaml").write_text("team: data\n")
    (sysenv / "__main__.py").write_text("")

    return root


class TestHierarchicalConfig:
    def test_closest_file_wins(self, project):
        config = HierarchicalConfig(entrypoint=project / "sysenvs" / "example" / "__main__.py")

        assert config["team"] == "data"
        assert config["tag_namespace"] == "acme"
        assert config.get("log_prefix") == "logs/"

    def test_stops_at_project_root(self, project):
        (project.parent / "Cds.common.yaml").write_text("tag_separator: '-'\n")

        config = HierarchicalConfig(entrypoint=project / "sysenvs" / "example" / "__main__.py")

        assert "tag_separator" not in config

    def test_limit(self, project):
        config = HierarchicalConfig(limit=1, entrypoint=project / "sysenvs" / "example" / "__main__.py")

        assert dict(config) == {"team": "data"}

    def test_custom_filename(self, project):
        (project / "Other.yaml").write_text("team: security\n")

        config = HierarchicalConfig(filename="Other.yaml", entrypoint=project / "sysenvs" / "example" / "__main__.py")

        assert dict(config) == {"team": "security"}

    def test_without_config_files(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / "__main__.py").write_text("")

        config = HierarchicalConfig(entrypoint=tmp_path / "__main__.py")

        assert dict(config) == {}
        assert config.get("team") is None

    def test_require(self, project):
        config = HierarchicalConfig(entrypoint=project / "sysenvs" / "example" / "__main__.py")

        assert config.require("team") == "data"

        with pytest.raises(CdsConfigException, match="Missing required configuration variable 'purpose'"):
            config.require("purpose")


@dataclass
class _BucketConfig:
    name: str
    sse_algorithm: SSEAlgorithm = SSEAlgorithm.AES
    log_prefix: Optional[str] = None


@dataclass
class _StackConfig:
    buckets: list[_BucketConfig] = field(default_factory=list)
    retention_days: int = 7


class TestMapper:
    def test_parse_args_value(self):
        assert mapper._parse_args_value('{"a": [1, 2]}') == {"a": [1, 2]}
        assert mapper._parse_args_value("acme-bucket") == "acme-bucket"
        assert mapper._parse_args_value(None) is None

    def test_raw_stack_config(self, monkeypatch):
        monkeypatch.setattr(
            mapper.runtime.config,
            "CONFIG",
            {
                "aws:region": "eu-west-1",
                "storage:retention_days": "30",
                "storage:buckets": '[{"name": "acme"}]',
                "storage-archive:retention_days": "365",
            },
        )

        assert mapper.get_raw_stack_config("storage") == {"retention_days": 30, "buckets": [{"name": "acme"}]}

    def test_stack_config(self, monkeypatch):
        monkeypatch.setattr(
            mapper,
            "get_raw_stack_config",
            lambda stack: {"buckets": [{"name": "acme", "sse_algorithm": "aws:kms"}], "retention_days": 30},
        )

        config = get_stack_config("storage", _StackConfig)

        assert config == _StackConfig(
            buckets=[_BucketConfig(name="acme", sse_algorithm=SSEAlgorithm.KMS)],
            retention_days=30,
        )

    def test_stack_config_defaults(self, monkeypatch):
        monkeypatch.setattr(mapper, "get_raw_stack_config", lambda stack: {})

        assert get_stack_config("s3", S3Args) == S3Args()

    def test_unknown_keys_are_rejected(self, monkeypatch):
        monkeypatch.setattr(mapper, "get_raw_stack_config", lambda stack: {"retention": 30})

        with pytest.raises(StackConfigError, match="invalid configuration for stack `storage`") as e:
            get_stack_config("storage", _StackConfig)

        assert e.value.stack == "storage"

    def test_unknown_enum_value(self, monkeypatch):
        monkeypatch.setattr(
            mapper, "get_raw_stack_config", lambda stack: {"buckets": [{"name": "acme", "sse_algorithm": "des"}]}
        )

        with pytest.raises(StackConfigError):
            get_stack_config("storage", _StackConfig)


class TestTags:
    def test_tags(self):
        tags = get_tags("s3", "private", "acme-uploads")

        assert tags["Name"] == "s3-private-acme-uploads"
        assert tags[f"{tag_prefix}service"] == "s3"
        assert tags[f"{tag_prefix}role"] == "private"
        assert tags[f"{tag_prefix}group"] == "acme-uploads"
        assert tags[f"{tag_prefix}createdby"] == "pulumi"
        assert f"{tag_prefix}stack" in tags
        assert f"{tag_prefix}project" in tags

    def test_main_group(self):
        tags = get_tags("s3", "log")

        assert tags["Name"] == "s3-log"
        assert tags[f"{tag_prefix}group"] == "main"

    def test_team(self, monkeypatch):
        monkeypatch.setattr("cds_constructs.lib.tags.get_team", lambda: "platform")

        assert get_tags("s3", "log")[f"{tag_prefix}team"] == "platform"
